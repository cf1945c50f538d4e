"""Errors and exceptions raised by the library
"""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class IdentityError(Exception):
    """Base class for every identity resolution failure"""


class NotFound(IdentityError, Generic[T]):
    """Raised when a search for an element of type T is not found"""

    def __init__(self, search: None | T = None) -> None:
        """
        Args:
            search: The element not found during the search.
        """
        self.search = search
        if self.search is not None:
            msg = f"{search} not found."
            super().__init__(msg)
        else:
            super().__init__()


class UnknownUser(NotFound[str]):
    """No passwd entry matched the query, neither by name nor by uid"""

    def __init__(self, query: str) -> None:
        """
        Args:
            query: The user name or decimal uid searched.
        """
        super().__init__(f"user {query!r}")
        self.query = query
        """The user name or uid not found"""


class UnknownGroup(NotFound[str]):
    """No group entry matched the query by name.

    Groups are matched by name only; a numeric query is *not* compared
    against the group ids.
    """

    def __init__(self, query: str) -> None:
        super().__init__(f"group {query!r}")
        self.query = query
        """The group name not found"""


class MalformedDatabase(IdentityError):
    """Raised when a passwd or group line cannot be parsed"""

    def __init__(
        self,
        line: str,
        file: None | str = None,
        lineno: None | int = None,
        reason: None | str = None,
    ) -> None:
        """
        Args:
            line: The offending line, without the line terminator.
            file: The database containing the line, if known.
            lineno: Line number (starting at 1) inside *file*.
            reason: Short description of the problem.
        """
        self.line = line
        self.file = file
        self.lineno = lineno
        self.reason = reason

        location = ""
        if file is not None:
            location = file if lineno is None else f"{file}:{lineno}"
            location += ": "
        msg = f"{location}malformed line {line!r}"
        if reason is not None:
            msg += f" ({reason})"
        super().__init__(msg)


class UnsupportedPlatform(IdentityError):
    """The target platform has no local passwd/group file convention.

    This is not an empty result: the operation cannot be performed at
    all for the target.
    """

    def __init__(self, platform: None | str = None) -> None:
        """
        Args:
            platform: Name of the unsupported platform or OS family.
        """
        self.platform = platform
        msg = "identity resolution is not supported"
        if platform is not None:
            msg += f" on {platform}"
        super().__init__(msg)


class ResolveTimeout(IdentityError):
    """Raised when reading a database takes longer than allowed"""

    def __init__(self, file: str, timeout: float, msg: None | str = None) -> None:
        """
        Args:
            file: The database being read.
            timeout: The time allowed for the scan, in seconds.
            msg: The exception message.
        """
        self.file = file
        """The database being scanned"""

        self.timeout = timeout
        """The time allowed for the scan"""

        if msg is None:
            msg = f"reading {file} took more than {timeout} seconds"
        super().__init__(msg)


class Bug(Exception):
    """Internal bug or unexpected situation.

    If you encounter an exception like this, please consider
    reporting it.
    """

    def __init__(self, msg: None | str = None) -> None:
        super().__init__(msg)
