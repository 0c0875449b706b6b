from __future__ import annotations

import sys
import types
from pathlib import Path

import pytest

from lib_module_loader.adapters.module_loaders.filesystem import BytecodeModuleLoader, SourceModuleLoader
from lib_module_loader.domain.errors import InvalidModule, ModuleExecutionError, ModuleNotFound


def test_source_loader_executes_module(write_module) -> None:
    path = write_module("hello.py", "def hello():\n    return 'hi'\n")

    module = SourceModuleLoader().load(str(path), "adapter_hello")

    assert module.hello() == "hi"
    assert module.__name__ == "adapter_hello"
    assert module.__file__ == str(path)


def test_source_loader_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ModuleNotFound):
        SourceModuleLoader().load(str(tmp_path / "missing.py"), "adapter_missing")


def test_module_is_registered_while_executing(write_module) -> None:
    path = write_module(
        "points.py",
        """
        from __future__ import annotations

        import sys
        from dataclasses import dataclass

        SEEN_SELF = sys.modules.get(__name__) is not None


        @dataclass
        class Point:
            x: int
            y: int
        """,
    )

    module = SourceModuleLoader().load(str(path), "adapter_points")

    assert module.SEEN_SELF is True
    assert module.Point(1, 2).y == 2
    assert "adapter_points" not in sys.modules


def test_previous_registration_is_restored(write_module) -> None:
    sentinel = types.ModuleType("adapter_sentinel")
    sys.modules["adapter_sentinel"] = sentinel
    try:
        ok = write_module("ok.py", "VALUE = 1\n")
        SourceModuleLoader().load(str(ok), "adapter_sentinel")
        assert sys.modules["adapter_sentinel"] is sentinel

        bad = write_module("bad.py", "raise LookupError('nope')\n")
        with pytest.raises(ModuleExecutionError):
            SourceModuleLoader().load(str(bad), "adapter_sentinel")
        assert sys.modules["adapter_sentinel"] is sentinel
    finally:
        sys.modules.pop("adapter_sentinel", None)


def test_failed_registered_load_leaves_no_entry(write_module) -> None:
    bad = write_module("bad.py", "raise LookupError('nope')\n")

    with pytest.raises(ModuleExecutionError):
        SourceModuleLoader().load(str(bad), "adapter_failed", register=True)

    assert "adapter_failed" not in sys.modules


def test_keyboard_interrupt_is_not_wrapped(write_module) -> None:
    path = write_module("interrupt.py", "raise KeyboardInterrupt\n")

    with pytest.raises(KeyboardInterrupt):
        SourceModuleLoader().load(str(path), "adapter_interrupt")


def test_source_loader_reports_syntax_errors(write_module) -> None:
    path = write_module("broken.py", "def broken(:\n")

    with pytest.raises(InvalidModule) as excinfo:
        SourceModuleLoader().load(str(path), "adapter_broken")

    assert isinstance(excinfo.value.__cause__, SyntaxError)


def test_bytecode_loader_rejects_source_file(write_module) -> None:
    path = write_module("plain.py", "VALUE = 1\n")

    with pytest.raises(InvalidModule):
        BytecodeModuleLoader().load(str(path), "adapter_plain")


def test_keyboard_interrupt_leaves_no_registration(write_module) -> None:
    path = write_module("interrupt_again.py", "raise KeyboardInterrupt\n")

    with pytest.raises(KeyboardInterrupt):
        SourceModuleLoader().load(str(path), "adapter_interrupt_again", register=True)

    assert "adapter_interrupt_again" not in sys.modules


def test_base_loader_is_abstract() -> None:
    from lib_module_loader.adapters.module_loaders.filesystem import BaseModuleLoader

    with pytest.raises(TypeError):
        BaseModuleLoader()


def test_module_replacing_itself_in_sys_modules_is_returned(write_module) -> None:
    path = write_module(
        "swap.py",
        """
        import sys
        import types

        sys.modules[__name__] = types.SimpleNamespace(hello=lambda: "swapped")
        """,
    )

    loaded = SourceModuleLoader().load(str(path), "adapter_swap")

    assert loaded.hello() == "swapped"
    assert "adapter_swap" not in sys.modules


def test_source_loader_leaves_no_bytecode_cache(write_module, tmp_path: Path) -> None:
    path = write_module("nocache.py", "VALUE = 1\n")

    SourceModuleLoader().load(str(path), "adapter_nocache")

    assert not (tmp_path / "__pycache__").exists()
