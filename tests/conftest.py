from __future__ import annotations

import pathlib

import pytest
import utils

import chrootid
from chrootid.resolver import PosixResolver
from chrootid.utils.config import Settings


@pytest.fixture
def memory_reader() -> utils.MemoryReader:
    """Reader serving the sample passwd and group databases"""
    return utils.MemoryReader(
        {"/etc/passwd": utils.PASSWD, "/etc/group": utils.GROUP}
    )


@pytest.fixture
def posix(memory_reader: utils.MemoryReader) -> PosixResolver:
    """Resolver over the sample databases, with the default settings"""
    return PosixResolver(memory_reader, Settings())


@pytest.fixture
def rootfs(tmp_path: pathlib.Path) -> pathlib.Path:
    """Generate a root filesystem tree containing an ``etc`` folder.

    Returns:
        The root of the tree; the sample databases are written in
        ``etc/passwd`` and ``etc/group``.
    """
    etc = tmp_path / "etc"
    etc.mkdir()
    (etc / "passwd").write_text(utils.PASSWD, encoding="utf8")
    (etc / "group").write_text(utils.GROUP, encoding="utf8")
    yield tmp_path


@pytest.fixture
def debug_ui():
    """Log every message while the test runs"""
    chrootid.initlib(chrootid.utils.ui.DEBUG)
    yield chrootid.utils.ui.instance()
    chrootid.initlib()
