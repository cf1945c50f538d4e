"""Log style user interface"""

from __future__ import annotations

import re
import sys
import warnings
from datetime import datetime
from typing import Any, TextIO, Type

from chrootid.utils import ui


class LogUI(ui.UI):
    def __init__(self, level: int, stream: None | TextIO = None) -> None:
        self.level: int = level
        self.stream = stream
        warnings.showwarning = self.warning_override

    def get_leading(self, level: None | ui.LEVEL_LITERAL) -> str:
        ret = f"[{datetime.now().isoformat()}]"
        if level is not None:
            ret += f" [{ui.LEVEL_STRING[level]:^7}]"
        return ret

    def print(self, *values: str | Any, level: None | ui.LEVEL_LITERAL = None) -> None:
        stream = sys.stderr if self.stream is None else self.stream
        print(self.get_leading(level), *values, file=stream)

    def message(self, level: ui.LEVEL_LITERAL, *values: str | Any) -> None:
        if level >= self.level:
            self.print(*values, level=level)

    def warning_override(
        self,
        message: Warning | str,
        category: Type[Warning],
        filename: str,
        lineno: int,
        file: TextIO | None = None,
        line: str | None = None,
    ) -> None:
        filename = re.sub(".*chrootid(.*)", r"chrootid\1", filename)
        self.warning(str(message) + f"\nat {filename}:{lineno}")
