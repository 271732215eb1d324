from __future__ import annotations

"""Utilities for resolving default schema locations."""

from pathlib import Path


def schemas_path(path: str | None) -> str:
    return path or str(Path.cwd() / "schemas")
