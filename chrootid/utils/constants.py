"""Collection of global constants and useful definitions"""
from __future__ import annotations

from typing_extensions import Literal, TypeAlias

PASSWD_PATH = "/etc/passwd"
"""Location of the user database, relative to the root directory"""

GROUP_PATH = "/etc/group"
"""Location of the group database, relative to the root directory"""

PASSWD_FIELDS = 7
"""Number of colon separated columns in a passwd line"""

GROUP_FIELDS = 4
"""Number of colon separated columns in a group line"""

MAX_ID = 2**64
"""Exclusive upper bound for uid and gid values"""

FamilyLiteral: TypeAlias = Literal["posix", "windows"]
"""Broad OS family"""

SUPPORTED_FAMILIES: tuple[FamilyLiteral, ...] = ("posix",)
"""OS families with a local passwd/group text file convention"""

MalformedPolicyLiteral: TypeAlias = Literal["skip", "truncate", "strict"]
"""What to do when a database line cannot be parsed.

- ``skip``: ignore the line and keep scanning.
- ``truncate``: stop the scan, as if the end of the file was reached.
- ``strict``: raise :py:class:`chrootid.errors.MalformedDatabase`.
"""

MAX_LINE_LENGTH = 64 * 1024
"""Longest accepted database line, without the line terminator"""

MAX_SYMLINKS = 40
"""Symbolic links followed while resolving a path inside a root"""
