"""Composition root for ``lib_module_loader``.

Purpose
-------
Provide the entry points that turn a file path into an executed Python module:
a blocking :func:`load_module` and the error-first callback surface
:func:`load`. Compilation and execution are delegated to :mod:`importlib`
through the filesystem adapters; this module picks the adapter, names the
module, and routes outcomes.

Contents
--------
* :data:`_MODULE_LOADERS` – mapping of file suffixes to loader instances.
* :func:`load` – invoke a callback with ``(error, exports)``.
* :func:`load_module` – return the executed module or raise ``LoaderError``.
* :func:`get_export` – look up a callable export on a loaded module.
* :func:`module_name_for` – deterministic module name for a path.

System Role
-----------
Connects the filesystem adapters with the domain error taxonomy while
emitting structured observability signals. The CLI and the example script
only talk to this module.
"""

from __future__ import annotations

import hashlib
import os
import re
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

from .adapters.env.default import LoaderSettings, default_env_prefix, load_settings
from .adapters.module_loaders.filesystem import BytecodeModuleLoader, SourceModuleLoader
from .adapters.path_resolvers.default import resolve_target, script_dir
from .application.ports import LoadCallback, ModuleLoader
from .domain.errors import (
    ExportNotFound,
    InvalidModule,
    LoaderError,
    ModuleExecutionError,
    ModuleNotFound,
    UnsupportedModule,
)
from .observability import bind_trace_id, log_debug, log_error, log_info, make_event

# Loaders keyed by lower-case suffix.
_MODULE_LOADERS: dict[str, ModuleLoader] = {
    ".py": SourceModuleLoader(),
    ".pyc": BytecodeModuleLoader(),
}

_NAME_UNSAFE = re.compile(r"\W")


def load(path: str | os.PathLike[str], callback: LoadCallback, *, register: bool | None = None) -> None:
    """Load the module at *path* and report the outcome to *callback*.

    Why
    ----
    Mirrors the error-first calling convention: the callback receives
    ``(None, module)`` on success or ``(error, None)`` on failure.

    What
    ----
    The callback runs exactly once, synchronously, before :func:`load`
    returns. Only :class:`LoaderError` subclasses are routed to the
    callback; anything the callback itself raises propagates to the caller
    and never triggers a second invocation.

    Parameters
    ----------
    path:
        Path to a ``.py`` or ``.pyc`` file.
    callback:
        Error-first completion callback.
    register:
        Keep the module in :data:`sys.modules`; ``None`` defers to
        ``LIB_MODULE_LOADER_REGISTER``.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> target = Path(tmp.name) / 'hello.py'
    >>> _ = target.write_text('def hello():\\n    return "hi"\\n', encoding='utf-8')
    >>> load(target, lambda err, exports: print(err, exports.hello()))
    None hi
    >>> load(Path(tmp.name) / 'missing.py', lambda err, exports: print(type(err).__name__, exports))
    ModuleNotFound None
    >>> tmp.cleanup()
    """

    try:
        module = load_module(path, register=register)
    except LoaderError as exc:
        log_debug("callback_error", **make_event("callback", os.fspath(path), {"error": type(exc).__name__}))
        callback(exc, None)
        return
    callback(None, module)


def load_module(path: str | os.PathLike[str], *, register: bool | None = None) -> ModuleType:
    """Return the executed module found at *path*.

    Raises
    ------
    UnsupportedModule
        When the suffix has no registered loader.
    ModuleNotFound / InvalidModule / ModuleExecutionError
        Propagated from the filesystem adapter.

    Side Effects
    ------------
    Binds the module name as the active trace identifier so every event of
    this load correlates.
    """

    target = os.path.abspath(os.fspath(path))
    suffix = Path(target).suffix.lower()
    loader = _MODULE_LOADERS.get(suffix)
    if loader is None:
        supported = ", ".join(sorted(_MODULE_LOADERS))
        log_error("module_unsupported", **make_event("load", target, {"suffix": suffix}))
        raise UnsupportedModule(f"Unsupported module suffix {suffix!r} for {target}; expected one of {supported}")

    if register is None:
        register = load_settings().register

    name = module_name_for(target)
    bind_trace_id(name)
    log_debug("module_loading", **make_event("load", target, {"module": name}))
    module = loader.load(target, name, register=register)
    log_info("module_loaded", **make_event("load", target, {"module": name, "registered": register}))
    return module


def get_export(exports: Any, name: str) -> Callable[..., Any]:
    """Return the callable attribute *name* of *exports*.

    Raises
    ------
    ExportNotFound
        When the attribute is missing or not callable; ``None`` exports (a
        failed load) are reported the same way.

    Examples
    --------
    >>> import math
    >>> get_export(math, 'sqrt')(9.0)
    3.0
    >>> get_export(math, 'pi')
    Traceback (most recent call last):
    ...
    lib_module_loader.domain.errors.ExportNotFound: Export 'pi' of math is not callable
    """

    label = getattr(exports, "__name__", type(exports).__name__)
    try:
        candidate = getattr(exports, name)
    except AttributeError as exc:
        raise ExportNotFound(f"Export {name!r} not found on {label}") from exc
    if not callable(candidate):
        raise ExportNotFound(f"Export {name!r} of {label} is not callable")
    return candidate


def public_exports(exports: ModuleType) -> list[str]:
    """Return the sorted names of public callables defined by *exports*.

    Examples
    --------
    >>> import types
    >>> demo = types.ModuleType('demo')
    >>> demo.hello = lambda: None
    >>> demo._hidden = lambda: None
    >>> demo.VALUE = 1
    >>> public_exports(demo)
    ['hello']
    """

    names = getattr(exports, "__all__", None)
    if names is None:
        names = [key for key in vars(exports) if not key.startswith("_")]
    return sorted(key for key in names if callable(getattr(exports, key, None)))


def module_name_for(path: str | os.PathLike[str]) -> str:
    """Return a deterministic, identifier-safe module name for *path*.

    The file stem keeps log output readable; the digest of the absolute path
    keeps two ``hello.py`` files in different directories apart.

    Examples
    --------
    >>> module_name_for('/repo/fixtures/module/hello.py').startswith('hello_')
    True
    >>> module_name_for('/a/hello.py') != module_name_for('/b/hello.py')
    True
    """

    target = os.path.abspath(os.fspath(path))
    stem = _NAME_UNSAFE.sub("_", Path(target).name.split(".", 1)[0]) or "module"
    if stem[0].isdigit():
        stem = f"_{stem}"
    digest = hashlib.sha1(os.fsencode(target)).hexdigest()[:12]
    return f"{stem}_{digest}"


__all__ = [
    "ExportNotFound",
    "InvalidModule",
    "LoaderError",
    "LoaderSettings",
    "ModuleExecutionError",
    "ModuleNotFound",
    "UnsupportedModule",
    "default_env_prefix",
    "get_export",
    "load",
    "load_module",
    "load_settings",
    "module_name_for",
    "public_exports",
    "resolve_target",
    "script_dir",
]
