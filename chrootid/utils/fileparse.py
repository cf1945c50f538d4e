"""General utilities for reading of common file formats"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Iterator, NamedTuple, Sequence, TypeVar

from chrootid.errors import Bug, MalformedDatabase
from chrootid.utils import ui
from chrootid.utils.constants import (
    GROUP_FIELDS,
    MAX_ID,
    MAX_LINE_LENGTH,
    PASSWD_FIELDS,
    MalformedPolicyLiteral,
)

_id_re = re.compile("[0-9]+")


class PasswdEntry(NamedTuple):
    """Python structure for storage of passwd entries"""

    username: str
    password: str
    uid: int
    gid: int
    comment: str
    home: str
    shell: str


class GroupEntry(NamedTuple):
    """Python structure for storage of group entries"""

    name: str
    password: str
    gid: int
    members: str
    """Raw comma separated list of user names and/or uids"""

    def member_list(self) -> list[str]:
        """Return the members of the group, ignoring empty items"""
        return [m for m in self.members.split(",") if m != ""]


def parse_id(value: str) -> int:
    """Parse a decimal uid or gid.

    Only plain ASCII digits are accepted; ``int()`` leniency (signs,
    whitespace, underscores) is rejected.

    Raises:
        ValueError: If *value* is not an unsigned 64 bit integer.
    """
    if _id_re.fullmatch(value) is None:
        raise ValueError(f"invalid id {value!r}")
    ret = int(value)
    if ret >= MAX_ID:
        raise ValueError(f"id {value} out of range")
    return ret


def _split(line: str, fields: int) -> list[str]:
    line = line.rstrip("\r\n")
    if len(line) >= MAX_LINE_LENGTH:
        raise MalformedDatabase(line[:32] + "...", reason="line too long")
    cols = line.split(":")
    if len(cols) != fields:
        raise MalformedDatabase(
            line, reason=f"expected {fields} fields, found {len(cols)}"
        )
    return cols


def parse_passwd_line(line: str) -> PasswdEntry:
    """Convert a single passwd line into a PasswdEntry.

    Raises:
        MalformedDatabase: If the line does not have exactly 7 fields, or
            the uid or gid are not unsigned integers.
    """
    cols = _split(line, PASSWD_FIELDS)
    try:
        uid = parse_id(cols[2])
        gid = parse_id(cols[3])
    except ValueError as exce:
        raise MalformedDatabase(line.rstrip("\r\n"), reason=str(exce)) from exce
    return PasswdEntry(
        username=cols[0],
        password=cols[1],
        uid=uid,
        gid=gid,
        comment=cols[4],
        home=cols[5],
        shell=cols[6],
    )


def parse_group_line(line: str) -> GroupEntry:
    """Convert a single group line into a GroupEntry.

    Raises:
        MalformedDatabase: If the line does not have exactly 4 fields, or
            the gid is not an unsigned integer.
    """
    cols = _split(line, GROUP_FIELDS)
    try:
        gid = parse_id(cols[2])
    except ValueError as exce:
        raise MalformedDatabase(line.rstrip("\r\n"), reason=str(exce)) from exce
    return GroupEntry(name=cols[0], password=cols[1], gid=gid, members=cols[3])


E = TypeVar("E")


def entries(
    lines: Iterable[str],
    parse: Callable[[str], E],
    policy: MalformedPolicyLiteral = "skip",
    file: None | str = None,
) -> Iterator[E]:
    """Lazily parse the lines of a database.

    Args:
        lines: The content of the database, one line per element.
        parse: The line parser, :py:func:`parse_passwd_line` or
            :py:func:`parse_group_line`.
        policy: What to do with malformed lines, see
            :py:data:`chrootid.utils.constants.MalformedPolicyLiteral`.
        file: Name of the database, used for messages.

    Yields:
        One entry per valid line, in file order.

    Raises:
        MalformedDatabase: If *policy* is ``strict`` and a line is invalid.
    """
    for lineno, line in enumerate(lines, start=1):
        try:
            entry = parse(line)
        except MalformedDatabase as exce:
            if policy == "strict":
                raise MalformedDatabase(
                    exce.line, file=file, lineno=lineno, reason=exce.reason
                ) from None
            if policy == "truncate":
                ui.instance().debug(f"{file}:{lineno}: {exce.reason}, stop reading")
                return
            if policy == "skip":
                ui.instance().debug(f"{file}:{lineno}: {exce.reason}, skipping")
                continue
            raise Bug(f"Unknown malformed line policy: {policy}") from exce
        yield entry


def passwd(content: Iterable[str]) -> Sequence[PasswdEntry]:
    """Convert the content of a passwd file into a list of PasswdEntry.

    Args:
        content: The content of a passwd file.

    Return:
        A list of all the entries found in the data provided.

    Raises:
        MalformedDatabase: If any line is invalid.
    """
    return [*entries(content, parse_passwd_line, "strict", "passwd")]


def group(content: Iterable[str]) -> Sequence[GroupEntry]:
    """Convert the content of a group file into a list of GroupEntry.

    Raises:
        MalformedDatabase: If any line is invalid.
    """
    return [*entries(content, parse_group_line, "strict", "group")]
