"""Shared fixtures: a fake owner and a throwaway process table."""

import locale
import logging
from typing import Any, Dict, Optional

import pytest
import toml

from focusmenu.core.session import ResolverSession
from tests.helpers import FakeOwner


@pytest.fixture(autouse=True)
def restore_collation_locale():
    saved = locale.setlocale(locale.LC_COLLATE)
    yield
    locale.setlocale(locale.LC_COLLATE, saved)


@pytest.fixture
def proc_root(tmp_path):
    root = tmp_path / "proc"
    root.mkdir()
    return root


@pytest.fixture
def add_process(proc_root):
    def _add(pid: int, raw: bytes) -> None:
        entry = proc_root / str(pid)
        entry.mkdir(exist_ok=True)
        (entry / "cmdline").write_bytes(raw)

    return _add


@pytest.fixture
def make_owner(proc_root):
    """Owner whose process table is the temporary proc_root."""

    def _make(config: Optional[Dict[str, Any]] = None) -> FakeOwner:
        config = dict(config or {})
        config.setdefault("processes", {"proc_root": str(proc_root)})
        return FakeOwner(config)

    return _make


@pytest.fixture
def owner(make_owner):
    return make_owner()


@pytest.fixture
def make_session(tmp_path, proc_root):
    """ResolverSession reading a throwaway config.toml and process table."""

    def _make(settings: Optional[Dict[str, Any]] = None, environ=None) -> ResolverSession:
        config = {"processes": {"proc_root": str(proc_root)}}
        for section, values in (settings or {}).items():
            config.setdefault(section, {}).update(values)
        config_file = tmp_path / "config" / "config.toml"
        config_file.parent.mkdir(exist_ok=True)
        config_file.write_text(toml.dumps(config))
        if environ is None:
            environ = {"LANG": "C", "XDG_DATA_HOME": str(tmp_path / "data")}
        return ResolverSession(
            logger=logging.getLogger("tests.owner"),
            config_file=config_file,
            environ=environ,
        )

    return _make
