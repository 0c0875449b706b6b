"""Support ``python -m lib_module_loader`` by delegating to :func:`cli.main`."""

from __future__ import annotations

import sys

from .cli import main


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main(sys.argv[1:]))
