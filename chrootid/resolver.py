"""User and group resolution inside a root filesystem tree.

The host identity services (``pwd``, ``grp``, NSS) describe the running
system, not an extracted image. The resolvers in this module read the
``/etc/passwd`` and ``/etc/group`` files found under a given root
directory instead.

Two implementations of :py:class:`IdentityResolver` are provided:

- :py:class:`PosixResolver` parses the text databases.
- :py:class:`UnsupportedResolver` is used for targets with no local
  database convention; every operation raises
  :py:class:`~chrootid.errors.UnsupportedPlatform`.

Use :py:func:`resolver` to get the right one for a platform.
"""
from __future__ import annotations

import dataclasses
import pathlib
import time
from contextlib import contextmanager
from typing import Iterator, NamedTuple, Optional, Union

from typing_extensions import Protocol

from chrootid.errors import (
    MalformedDatabase,
    ResolveTimeout,
    UnknownGroup,
    UnknownUser,
    UnsupportedPlatform,
)
from chrootid.reader import RootDirReader, RootFileReader
from chrootid.utils import fileparse, info, ui
from chrootid.utils.config import Settings
from chrootid.utils.constants import (
    GROUP_PATH,
    MAX_LINE_LENGTH,
    PASSWD_PATH,
    SUPPORTED_FAMILIES,
)

Root = Union[pathlib.Path, str]


class Specifier(NamedTuple):
    """A ``user[:group]`` string split in its parts"""

    user: str
    group: Optional[str] = None


def parse_specifier(spec: str, default_user: str = "0") -> Specifier:
    """Split *spec* on the first colon.

    Args:
        spec: The specifier, for instance ``"alice"`` or ``"1000:staff"``.
        default_user: User returned when the user part is empty.

    Returns:
        The user part and the group part; the group is ``None`` if
        missing or empty.
    """
    user, _, group = spec.partition(":")
    return Specifier(user or default_user, group or None)


@dataclasses.dataclass(frozen=True)
class ResolvedUser:
    """Identity of a user inside a root filesystem"""

    uid: int
    gid: int
    """Primary group; overridden if the specifier included a group"""

    home: str
    name: str
    """Name found in the passwd database"""


@dataclasses.dataclass(frozen=True)
class ResolvedGroup:
    """Identity of a group inside a root filesystem"""

    gid: int
    name: str


class UserLike(Protocol):
    """Minimum information required to look for supplementary groups"""

    @property
    def uid(self) -> int | str:
        ...

    @property
    def name(self) -> str:
        ...


class IdentityResolver(Protocol):
    """Resolve users and groups using the databases of a root directory"""

    def resolve_user(self, root: Root, spec: str) -> ResolvedUser:
        """Resolve a ``user[:group]`` specifier.

        The user part is matched against the name *or* the uid of the
        passwd entries; an empty user part means the default user
        (``"0"``). The group part, if present, is matched by name only and
        replaces the primary group of the user.

        Args:
            root: The root directory of the filesystem tree.
            spec: The specifier to resolve.

        Raises:
            UnknownUser: If the user is not in the passwd database.
            UnknownGroup: If the group is not in the group database.
            UnsupportedPlatform: If the resolver cannot run on the target.
        """
        ...

    def resolve_group(self, root: Root, group_spec: str) -> ResolvedGroup:
        """Look for a group by name.

        Raises:
            UnknownGroup: If there is no group called *group_spec*.
            UnsupportedPlatform: If the resolver cannot run on the target.
        """
        ...

    def resolve_supplementary_groups(self, root: Root, user: UserLike) -> list[int]:
        """Return the gids of all the groups listing *user* as a member.

        Members are matched against the user name and the decimal uid.

        Raises:
            UnsupportedPlatform: If the resolver cannot run on the target.
        """
        ...

    def lookup_home(self, root: Root, uid: int) -> str:
        """Return the home directory of the first passwd entry with *uid*.

        Raises:
            UnknownUser: If no entry has the uid.
            UnsupportedPlatform: If the resolver cannot run on the target.
        """
        ...


class PosixResolver(IdentityResolver):
    """Resolver reading POSIX ``passwd`` and ``group`` text files.

    The resolver holds no state between calls; each operation opens,
    scans and closes its own streams, so a single instance can be shared
    between threads as long as the *reader* is reentrant.
    """

    def __init__(
        self,
        reader: None | RootFileReader = None,
        settings: None | Settings = None,
    ) -> None:
        """
        Args:
            reader: File access to the root directories. Defaults to
                reading from the host filesystem.
            settings: Resolver configuration; defaults if not provided.
        """
        self.settings = settings if settings is not None else Settings()
        self.reader = (
            reader if reader is not None else RootDirReader(self.settings.encoding)
        )

    @contextmanager
    def _lines(self, root: Root, file: str) -> Iterator[Iterator[str]]:
        timeout = self.settings.read_timeout
        start = time.monotonic()

        def _check() -> None:
            if timeout is not None and time.monotonic() - start > timeout:
                raise ResolveTimeout(file, timeout)

        def _overlong(chunk: str) -> bool:
            return len(chunk) == MAX_LINE_LENGTH and not chunk.endswith("\n")

        def _read(stream) -> Iterator[str]:
            while True:
                line = stream.readline(MAX_LINE_LENGTH)
                _check()
                if not line:
                    return
                # Only the head of an overlong line is kept; the parser
                # rejects it, the rest is discarded.
                rest = line
                while _overlong(rest):
                    rest = stream.readline(MAX_LINE_LENGTH)
                    _check()
                yield line

        ui.instance().debug(f"Scanning {file} in {root}")
        with self.reader.open(root, file) as stream:
            yield _read(stream)

    @contextmanager
    def _passwd(self, root: Root) -> Iterator[Iterator[fileparse.PasswdEntry]]:
        with self._lines(root, PASSWD_PATH) as lines:
            yield fileparse.entries(
                lines,
                fileparse.parse_passwd_line,
                self.settings.malformed_lines,
                PASSWD_PATH,
            )

    @contextmanager
    def _group(self, root: Root) -> Iterator[Iterator[fileparse.GroupEntry]]:
        with self._lines(root, GROUP_PATH) as lines:
            yield fileparse.entries(
                lines,
                fileparse.parse_group_line,
                self.settings.malformed_lines,
                GROUP_PATH,
            )

    def lookup_user(self, root: Root, query: str) -> fileparse.PasswdEntry:
        """Return the first passwd entry whose name or uid is *query*.

        Raises:
            UnknownUser: If no entry matches.
        """
        with self._passwd(root) as passwd:
            for pwd in passwd:
                if pwd.username == query or str(pwd.uid) == query:
                    return pwd
        raise UnknownUser(query)

    def lookup_group(self, root: Root, name: str) -> fileparse.GroupEntry:
        """Return the first group entry called *name*.

        Note: the gid is *not* compared; ``"2001"`` only matches a group
            named ``2001``.

        Raises:
            UnknownGroup: If no entry matches.
        """
        with self._group(root) as groups:
            for grp in groups:
                if grp.name == name:
                    return grp
        raise UnknownGroup(name)

    def lookup_home(self, root: Root, uid: int) -> str:
        with self._passwd(root) as passwd:
            for pwd in passwd:
                if pwd.uid == uid:
                    return pwd.home
        raise UnknownUser(str(uid))

    def resolve_user(self, root: Root, spec: str) -> ResolvedUser:
        user, group = parse_specifier(spec, self.settings.default_user)

        pwd = self.lookup_user(root, user)
        gid = pwd.gid
        if group is not None:
            gid = self.lookup_group(root, group).gid

        try:
            home = self.lookup_home(root, pwd.uid)
        except (UnknownUser, MalformedDatabase, OSError) as exce:
            ui.instance().debug(
                f"No home for uid {pwd.uid} ({exce}),",
                f"using {self.settings.default_home}",
            )
            home = self.settings.default_home

        return ResolvedUser(uid=pwd.uid, gid=gid, home=home, name=pwd.username)

    def resolve_group(self, root: Root, group_spec: str) -> ResolvedGroup:
        grp = self.lookup_group(root, group_spec)
        return ResolvedGroup(gid=grp.gid, name=grp.name)

    def resolve_supplementary_groups(self, root: Root, user: UserLike) -> list[int]:
        keys = {user.name, str(user.uid)}
        gids: list[int] = []
        with self._group(root) as groups:
            for grp in groups:
                if keys.intersection(grp.member_list()):
                    gids.append(grp.gid)
        return gids


class UnsupportedResolver(IdentityResolver):
    """Resolver for targets without local identity databases.

    Every operation raises :py:class:`~chrootid.errors.UnsupportedPlatform`;
    the filesystem is never accessed.
    """

    def __init__(self, platform: None | str = None) -> None:
        self.platform = platform

    def resolve_user(self, root: Root, spec: str) -> ResolvedUser:
        raise UnsupportedPlatform(self.platform)

    def resolve_group(self, root: Root, group_spec: str) -> ResolvedGroup:
        raise UnsupportedPlatform(self.platform)

    def resolve_supplementary_groups(self, root: Root, user: UserLike) -> list[int]:
        raise UnsupportedPlatform(self.platform)

    def lookup_home(self, root: Root, uid: int) -> str:
        raise UnsupportedPlatform(self.platform)


def resolver(
    platform: None | str = None,
    reader: None | RootFileReader = None,
    settings: None | Settings = None,
) -> IdentityResolver:
    """Return the resolver suited for *platform*.

    Args:
        platform: OS family of the target (``"posix"``, ``"windows"``...).
            Defaults to the host family.
        reader: Passed to :py:class:`PosixResolver`.
        settings: Passed to :py:class:`PosixResolver`.

    Returns:
        A :py:class:`PosixResolver` for supported families, an
        :py:class:`UnsupportedResolver` otherwise.
    """
    if platform is None:
        platform = info.host_family()
    if platform in SUPPORTED_FAMILIES:
        return PosixResolver(reader, settings)
    ui.instance().debug(f"No identity databases on {platform}")
    return UnsupportedResolver(platform)
