"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the module loader adapters, the
composition root, and consuming applications. The hierarchy lives in the
domain layer so outer layers may depend on it without creating import cycles.

Contents
--------
* :class:`LoaderError` – umbrella base class for all loading failures.
* :class:`ModuleNotFound` – the target path does not point to a file.
* :class:`UnsupportedModule` – no loader is registered for the file suffix.
* :class:`InvalidModule` – the file cannot be compiled or unmarshalled.
* :class:`ModuleExecutionError` – module code raised while executing.
* :class:`ExportNotFound` – an expected export is missing or not callable.

System Role
-----------
Adapters raise these exceptions (chaining the underlying cause) and
:func:`lib_module_loader.core.load` hands them to error-first callbacks.
Callers catch :class:`LoaderError` to handle all library failures uniformly.
"""

from __future__ import annotations


class LoaderError(Exception):
    """Base type for all exceptions emitted by ``lib_module_loader``.

    Why
    ----
    Provide a single catch-all type so callbacks and consumers can branch on
    "the load failed" without enumerating every cause.
    """


class ModuleNotFound(LoaderError):
    """Raised when the requested path is missing or is not a regular file."""


class UnsupportedModule(LoaderError):
    """Raised when the path suffix has no registered module loader.

    Typical Sources
    ---------------
    :func:`lib_module_loader.core.load_module` before any file access happens.
    """


class InvalidModule(LoaderError):
    """Raised when a module file cannot be turned into a code object.

    Typical Sources
    ---------------
    ``SyntaxError`` from source compilation, ``ImportError`` or ``EOFError``
    from malformed bytecode headers.
    """


class ModuleExecutionError(LoaderError):
    """Signifies that the module compiled but its top-level code raised.

    The original exception is preserved as ``__cause__``.
    """


class ExportNotFound(LoaderError):
    """Raised when a loaded module lacks a callable export the caller needs."""
