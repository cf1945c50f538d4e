from __future__ import annotations

import io
import pathlib
from typing import TextIO

from chrootid.reader import RootFileReader


class MemoryReader(RootFileReader):
    """Serve the databases from memory, ignoring the root directory"""

    def __init__(self, files: dict[str, str]) -> None:
        self.files = files
        self.opened: list[tuple[str, str]] = []

    def open(self, root: pathlib.Path | str, file: str) -> TextIO:
        self.opened.append((str(root), file))
        if file not in self.files:
            raise FileNotFoundError(file)
        return io.StringIO(self.files[file])


PASSWD = """testuser:x:1000:1000:I am test:/home/test:/bin/zsh
foo:x:2000:2000:I am foo:/home/foo:/bin/zsh
bar:x:2001:2001:I am bar:/home/bar:/bin/zsh
"""

MALFORMED_PASSWD = "bar:x:awdjawdj:foo"

GROUP = """bar:x:2001:testuser,foo
foo:x:2000:1000
test:x:1000:
"""

MALFORMED_GROUPS = "bar:x:awdjawdj:foo"
