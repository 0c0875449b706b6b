"""Shared fixtures for the loader test-suite."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

ModuleWriter = Callable[..., Path]


@pytest.fixture()
def write_module(tmp_path: Path) -> ModuleWriter:
    """Return a helper that writes dedented module source below ``tmp_path``."""

    def _write(relative: str, source: str = "") -> Path:
        target = tmp_path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(textwrap.dedent(source), encoding="utf-8")
        return target

    return _write

