"""User-Agent construction."""

from __future__ import annotations

import platform
from typing import Dict

from ._version import __version__

_app_metadata: Dict[str, str] = {}


def _replace_slashes(value: str) -> str:
    return value.replace("/", ":")


def add_app_metadata(*, name: str, version: str) -> None:
    """Append ``name/version`` to the User-Agent of every client created afterwards."""
    _app_metadata[_replace_slashes(name)] = version


def get_user_agent() -> str:
    parts = [
        f"slack-web-client/{__version__}",
        f"python/{platform.python_version()}",
        f"{platform.system().lower() or 'unknown'}/{platform.release() or 'unknown'}",
    ]
    parts.extend(f"{name}/{version}" for name, version in _app_metadata.items())
    return " ".join(parts)


__all__ = ["add_app_metadata", "get_user_agent"]
