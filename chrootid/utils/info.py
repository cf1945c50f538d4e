"""Retrieve information from various sources"""

import os

from chrootid.utils.constants import FamilyLiteral


def host_family() -> FamilyLiteral:
    """Return the OS family of the host running the library"""

    if os.name == "posix":
        return "posix"
    return "windows"
