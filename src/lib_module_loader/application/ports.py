"""Application-layer ports describing adapter and consumer responsibilities.

Purpose
-------
Define the structural contracts the composition root relies on so module
loading can be orchestrated without depending on concrete implementations.

Contents
--------
* :class:`ModuleLoader` – turns a file path into an executed module.
* :class:`LoadCallback` – error-first completion callback accepted by
  :func:`lib_module_loader.core.load`.
* :class:`HelloExports` – capability expected from the bundled fixture module.

System Role
-----------
Adapters implement :class:`ModuleLoader`; callers supply a
:class:`LoadCallback`. Tests assert conformance with ``isinstance`` checks,
hence the ``runtime_checkable`` decorators.
"""

from __future__ import annotations

from types import ModuleType
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ModuleLoader(Protocol):
    """Execute the module file at *path* under the module name *name*.

    Why
    ----
    Keep suffix-specific import machinery (source vs. bytecode) out of the
    composition root.
    """

    def load(self, path: str, name: str, *, register: bool = False) -> ModuleType:
        """Return the executed module or raise a ``LoaderError`` subclass."""


@runtime_checkable
class LoadCallback(Protocol):
    """Error-first completion callback.

    Exactly one of ``(None, exports)`` or ``(error, None)`` is delivered.
    """

    def __call__(self, error: BaseException | None, exports: ModuleType | None) -> Any:
        """Receive the outcome of a single load."""


@runtime_checkable
class HelloExports(Protocol):
    """Capability interface satisfied by modules exposing ``hello()``."""

    def hello(self) -> Any:
        """Produce the greeting side effect."""
