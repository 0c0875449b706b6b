"""Public package surface for ``lib_module_loader``.

Exposes the error-first :func:`load` entry point, its blocking sibling
:func:`load_module`, path resolution helpers, the error taxonomy, and the
logging hooks so ``import lib_module_loader`` is all a consumer needs.
"""

from __future__ import annotations

from .core import (
    ExportNotFound,
    InvalidModule,
    LoaderError,
    LoaderSettings,
    ModuleExecutionError,
    ModuleNotFound,
    UnsupportedModule,
    default_env_prefix,
    get_export,
    load,
    load_module,
    load_settings,
    module_name_for,
    public_exports,
    resolve_target,
    script_dir,
)
from .examples import run_example
from .observability import bind_trace_id, get_logger

__all__ = [
    "ExportNotFound",
    "InvalidModule",
    "LoaderError",
    "LoaderSettings",
    "ModuleExecutionError",
    "ModuleNotFound",
    "UnsupportedModule",
    "bind_trace_id",
    "default_env_prefix",
    "get_export",
    "get_logger",
    "load",
    "load_module",
    "load_settings",
    "module_name_for",
    "public_exports",
    "resolve_target",
    "run_example",
    "script_dir",
]
