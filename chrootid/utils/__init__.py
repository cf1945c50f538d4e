"""Support module containing common utilities"""
from __future__ import annotations

from chrootid.utils import _ui_log, ui


def init_ui(verbosity_level: int = ui.WARNING) -> None:
    """Install the log user interface with the given verbosity"""

    ui.instance(_ui_log.LogUI(verbosity_level))
