"""Resolver settings.

Settings are plain pydantic models, so values are validated on
construction. They can be created directly or read from a TOML file
with :py:func:`load_config`::

    [resolver]
    malformed_lines = "truncate"
    default_home = "/root"
    read_timeout = 2.5
"""
from __future__ import annotations

import pathlib
import tomllib
import warnings
from typing import Optional

from pydantic import BaseModel, Field

from chrootid.utils.constants import MalformedPolicyLiteral


class Settings(BaseModel):
    """Configuration for the identity resolvers"""

    malformed_lines: MalformedPolicyLiteral = "skip"
    """Policy applied to lines that cannot be parsed"""

    default_user: str = "0"
    """User queried when the specifier has an empty user part"""

    default_home: str = "/"
    """Home directory used when the uid has no passwd entry"""

    encoding: str = "utf8"
    """Encoding of the passwd and group files"""

    read_timeout: Optional[float] = Field(default=None, gt=0)
    """Maximum time, in seconds, a single database scan may take"""


def load_config(file: pathlib.Path | str) -> Settings:
    """Read the settings stored in a TOML file.

    Args:
        file: The TOML file; only the ``[resolver]`` table is used.

    Returns:
        The settings found in the file, missing keys take the default
        value.

    Raises:
        ValueError: If the file contains invalid TOML or invalid values.
    """
    file = pathlib.Path(file).expanduser()
    with open(file, "rb") as stream:
        try:
            data = tomllib.load(stream)
        except tomllib.TOMLDecodeError as exce:
            raise ValueError(f"Invalid configuration file {file}: {exce}") from exce

    for key in data:
        if key != "resolver":
            warnings.warn(f"Ignoring unknown table [{key}] in {file}")

    return Settings(**data.get("resolver", {}))
