"""Filesystem module loaders.

Purpose
-------
Turn Python files on disk into executed module objects. Adapters are small
wrappers around :mod:`importlib.machinery` so error mapping, ``sys.modules``
bookkeeping, and observability live in one place.

Contents
--------
* :class:`BaseModuleLoader` – shared helpers for validating paths, compiling,
  and executing modules.
* :class:`SourceModuleLoader` – loader for ``.py`` source files.
* :class:`BytecodeModuleLoader` – loader for compiled ``.pyc`` files.

System Role
-----------
Selected by suffix in :func:`lib_module_loader.core.load_module`.
"""

from __future__ import annotations

import importlib.util
import sys
from abc import ABC, abstractmethod
from importlib.abc import FileLoader
from importlib.machinery import SourceFileLoader, SourcelessFileLoader
from pathlib import Path
from types import CodeType, ModuleType

from ...domain.errors import InvalidModule, ModuleExecutionError, ModuleNotFound
from ...observability import log_debug, log_error

# Raised by importlib while reading or unmarshalling a file, before any module
# code runs.
_COMPILE_ERRORS = (SyntaxError, ImportError, EOFError, ValueError, TypeError, OSError)


class BaseModuleLoader(ABC):
    """Common utilities shared by the filesystem module loaders.

    Subclasses choose the :mod:`importlib.machinery` file loader and how a
    code object is read from it. Code runs through :func:`exec` on the fresh
    module namespace rather than ``FileLoader.exec_module`` so that failures
    while building the code object (:class:`InvalidModule`) stay separate from
    failures raised by module code (:class:`ModuleExecutionError`).
    """

    format = "python"
    file_loader_cls: type[FileLoader]

    def load(self, path: str, name: str, *, register: bool = False) -> ModuleType:
        """Execute the module at *path* and return it.

        Why
        ----
        Module code may look itself up in :data:`sys.modules` while running
        (``dataclasses``, ``pickle``, ``typing.get_type_hints``), so the module
        is registered for the duration of execution. Afterwards the previous
        entry is restored unless *register* asks to keep the new module.

        Parameters
        ----------
        path:
            Absolute path to the module file.
        name:
            Module name assigned to ``__name__``.
        register:
            Keep the module in :data:`sys.modules` after a successful load.

        Raises
        ------
        ModuleNotFound
            When *path* is not a regular file.
        InvalidModule
            When the file cannot be compiled or unmarshalled.
        ModuleExecutionError
            When the module's top-level code raises.

        Examples
        --------
        >>> from tempfile import TemporaryDirectory
        >>> tmp = TemporaryDirectory()
        >>> target = Path(tmp.name) / 'greeting.py'
        >>> _ = target.write_text('WORD = "hi"', encoding='utf-8')
        >>> SourceModuleLoader().load(str(target), 'greeting_demo').WORD
        'hi'
        >>> 'greeting_demo' in sys.modules
        False
        >>> tmp.cleanup()
        """

        self._ensure_file(path)
        file_loader = self.file_loader_cls(name, path)
        module = self._create_module(file_loader, name, path)
        code = self._compile(file_loader, name, path)

        previous = sys.modules.get(name)
        sys.modules[name] = module
        executed = False
        try:
            exec(code, module.__dict__)
            # Modules may swap their own sys.modules entry, as with a regular import.
            module = sys.modules.get(name, module)
            executed = True
        except Exception as exc:
            log_error("module_failed", stage="execute", path=path, module=name, error=repr(exc))
            raise ModuleExecutionError(f"Module {path} raised during execution: {exc!r}") from exc
        finally:
            if not (executed and register):
                _restore(name, previous)
        log_debug("module_executed", stage="execute", path=path, module=name, format=self.format, registered=register)
        return module

    @abstractmethod
    def _read_code(self, file_loader: FileLoader, name: str, path: str) -> CodeType | None:
        """Return the code object held by *path* without touching any bytecode cache."""

    @staticmethod
    def _ensure_file(path: str) -> None:
        """Raise :class:`ModuleNotFound` unless *path* is a regular file.

        Examples
        --------
        >>> BaseModuleLoader._ensure_file('/definitely/not/here.py')
        Traceback (most recent call last):
        ...
        lib_module_loader.domain.errors.ModuleNotFound: Module file not found: /definitely/not/here.py
        """

        if not Path(path).is_file():
            raise ModuleNotFound(f"Module file not found: {path}")

    @staticmethod
    def _create_module(file_loader: FileLoader, name: str, path: str) -> ModuleType:
        spec = importlib.util.spec_from_file_location(name, path, loader=file_loader)
        if spec is None:
            raise InvalidModule(f"Cannot build an import spec for {path}")
        return importlib.util.module_from_spec(spec)

    def _compile(self, file_loader: FileLoader, name: str, path: str) -> CodeType:
        """Return the code object for *path*, mapping importlib failures to ``InvalidModule``."""

        try:
            code = self._read_code(file_loader, name, path)
        except _COMPILE_ERRORS as exc:
            log_error("module_invalid", stage="compile", path=path, format=self.format, error=str(exc))
            raise InvalidModule(f"Invalid {self.format} module {path}: {exc}") from exc
        if code is None:
            raise InvalidModule(f"No code object produced for {path}")
        return code


class SourceModuleLoader(BaseModuleLoader):
    """Load ``.py`` files, compiling them from source on every load.

    ``SourceFileLoader.get_code`` would write and later trust
    ``__pycache__`` entries keyed on mtime and size, so the source bytes are
    compiled directly instead.
    """

    format = "source"
    file_loader_cls = SourceFileLoader

    def _read_code(self, file_loader: FileLoader, name: str, path: str) -> CodeType | None:
        return file_loader.source_to_code(file_loader.get_data(path), path)


class BytecodeModuleLoader(BaseModuleLoader):
    """Load compiled ``.pyc`` files produced for the running interpreter.

    Bytecode written by a different interpreter version carries a different
    magic number and is rejected with :class:`InvalidModule`.
    """

    format = "bytecode"
    file_loader_cls = SourcelessFileLoader

    def _read_code(self, file_loader: FileLoader, name: str, path: str) -> CodeType | None:
        return file_loader.get_code(name)


def _restore(name: str, previous: ModuleType | None) -> None:
    """Put the :data:`sys.modules` entry for *name* back to *previous*."""

    if previous is None:
        sys.modules.pop(name, None)
    else:
        sys.modules[name] = previous
