"""Access to files inside a root directory.

The resolvers never open files directly; they ask a
:py:class:`RootFileReader` for them. Readers must be reentrant: every call
to :py:meth:`RootFileReader.open` returns a new, independent stream.
"""
from __future__ import annotations

import errno
import os
import pathlib
import stat
from typing import TextIO

from typing_extensions import Protocol

from chrootid.utils.constants import MAX_SYMLINKS


class RootFileReader(Protocol):
    """Open files located under a root directory"""

    def open(self, root: pathlib.Path | str, file: str) -> TextIO:
        """Open *file* for reading, relative to *root*.

        Args:
            root: The root directory of the filesystem tree.
            file: Absolute path of the file *inside* the tree, for
                instance ``/etc/passwd``.

        Returns:
            A text stream; the caller is in charge of closing it.

        Raises:
            OSError: If the file cannot be opened.
        """
        ...


class RootDirReader(RootFileReader):
    """Read files from a directory in the host filesystem.

    Paths are resolved as if *root* was ``/``: symbolic links inside the
    tree, absolute or relative, and ``..`` components never leave it.
    Only regular files are opened; devices and FIFOs are refused, since
    reading them may never end.

    Undecodable bytes are kept as lone surrogates (``surrogateescape``),
    so a stray Latin-1 comment does not prevent reading the database.
    """

    def __init__(self, encoding: str = "utf8") -> None:
        self.encoding = encoding

    def path(self, root: pathlib.Path | str, file: str) -> pathlib.Path:
        """Return the host location of *file*, following links inside *root*.

        Raises:
            OSError: If too many symbolic links are found (``ELOOP``).
        """
        root = pathlib.Path(root)
        pending = [p for p in pathlib.PurePosixPath(file).parts if p != "/"]
        resolved: list[str] = []
        links = 0
        while pending:
            part = pending.pop(0)
            if part == ".":
                continue
            if part == "..":
                if resolved:
                    resolved.pop()
                continue
            candidate = root.joinpath(*resolved, part)
            if not candidate.is_symlink():
                resolved.append(part)
                continue
            links += 1
            if links > MAX_SYMLINKS:
                raise OSError(
                    errno.ELOOP, os.strerror(errno.ELOOP), str(root / file.lstrip("/"))
                )
            target = pathlib.PurePosixPath(os.readlink(candidate))
            if target.is_absolute():
                resolved = []
            pending = [p for p in target.parts if p != "/"] + pending
        return root.joinpath(*resolved)

    def open(self, root: pathlib.Path | str, file: str) -> TextIO:
        path = self.path(root, file)
        mode = os.stat(path).st_mode
        if not stat.S_ISREG(mode):
            raise OSError(errno.EINVAL, "Not a regular file", str(path))
        return open(
            path,
            "r",
            encoding=self.encoding,
            errors="surrogateescape",
            newline=None,
        )
