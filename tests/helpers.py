"""Test doubles shared across the suite."""

import logging
from typing import Any, Dict, Optional


class FakeOwner:
    """Stands in for the session: a logger plus a nested config dict."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.logger = logging.getLogger("tests.owner")
        self.config_data = config or {}

    def get_config(self, key_path, default=None):
        data = self.config_data
        for key in key_path:
            if isinstance(data, dict):
                data = data.get(key)
            else:
                return default
            if data is None:
                return default
        return data


def cmdline(*args: str) -> bytes:
    """Build a NUL-terminated cmdline record the way the kernel writes it."""
    return b"".join(arg.encode() + b"\0" for arg in args)
