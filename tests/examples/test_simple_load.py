"""The bundled example: resolve the fixture, load it, call ``hello()``."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from lib_module_loader import ModuleExecutionError, ModuleNotFound, module_name_for, run_example
from lib_module_loader.examples import FIXTURE_SEGMENTS, fixture_path
from lib_module_loader.examples import simple_load


def test_bundled_fixture_prints_hello_once(capsys: pytest.CaptureFixture[str]) -> None:
    result = run_example(environ={})

    assert result == "hello"
    assert capsys.readouterr().out == "hello\n"


def test_default_base_dir_is_the_example_directory() -> None:
    expected = Path(simple_load.__file__).resolve().parent.joinpath(*FIXTURE_SEGMENTS)
    assert Path(fixture_path(environ={})).resolve() == expected
    assert expected.is_file()


def test_fixture_path_scenario() -> None:
    assert fixture_path("/repo/examples", environ={}) == "/repo/examples/fixtures/module/hello.py"


def test_explicit_base_dir_wins_over_environment() -> None:
    environ = {"LIB_MODULE_LOADER_BASE_DIR": "/from/env"}
    assert fixture_path("/explicit", environ=environ) == "/explicit/fixtures/module/hello.py"
    assert fixture_path(environ=environ) == "/from/env/fixtures/module/hello.py"


def test_environment_base_dir_loads_custom_fixture(write_module, tmp_path: Path, monkeypatch) -> None:
    write_module("fixtures/module/hello.py", "def hello():\n    return 'custom'\n")
    monkeypatch.setenv("LIB_MODULE_LOADER_BASE_DIR", str(tmp_path))

    assert run_example() == "custom"


def test_loader_receives_resolved_path_and_hello_runs_once() -> None:
    seen: list[str] = []
    greetings: list[str] = []

    class Exports:
        def hello(self) -> str:
            greetings.append("hello")
            return "hello"

    def fake_loader(path, callback) -> None:
        seen.append(path)
        callback(None, Exports())

    assert run_example("/repo/examples", loader=fake_loader, environ={}) == "hello"
    assert seen == ["/repo/examples/fixtures/module/hello.py"]
    assert greetings == ["hello"]


def test_loader_error_is_raised_instead_of_calling_hello() -> None:
    failure = ModuleNotFound("no fixture")

    def failing_loader(path, callback) -> None:
        callback(failure, None)

    with pytest.raises(ModuleNotFound) as excinfo:
        run_example("/repo/examples", loader=failing_loader, environ={})

    assert excinfo.value is failure


def test_loader_that_never_completes_returns_none() -> None:
    assert run_example("/repo/examples", loader=lambda path, callback: None, environ={}) is None


def test_missing_fixture_directory_raises_module_not_found(tmp_path: Path) -> None:
    with pytest.raises(ModuleNotFound):
        run_example(tmp_path, environ={})


def test_fixture_that_raises_surfaces_execution_error(write_module, tmp_path: Path) -> None:
    write_module("fixtures/module/hello.py", "raise RuntimeError('fixture broke')\n")

    with pytest.raises(ModuleExecutionError):
        run_example(tmp_path, environ={})


def test_injected_environment_controls_registration(write_module, tmp_path: Path, monkeypatch) -> None:
    fixture = write_module("fixtures/module/hello.py", "def hello():\n    return 'registered'\n")
    name = module_name_for(fixture)
    monkeypatch.setenv("LIB_MODULE_LOADER_REGISTER", "true")
    try:
        assert run_example(tmp_path, environ={}) == "registered"
        assert name not in sys.modules

        run_example(tmp_path, environ={"LIB_MODULE_LOADER_REGISTER": "true"})
        assert name in sys.modules
    finally:
        sys.modules.pop(name, None)
