"""Runnable examples demonstrating the ``lib_module_loader`` calling convention."""

from .simple_load import FIXTURE_SEGMENTS, fixture_path, run_example

__all__ = [
    "FIXTURE_SEGMENTS",
    "fixture_path",
    "run_example",
]
