"""CLI adapter for ``lib_module_loader`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose path resolution, module loading, and the bundled example through a
command line interface so the calling convention can be tried without writing
Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_resolve` – prints the absolute path of joined segments.
* :func:`cli_load` – loads a module and lists or calls its exports.
* :func:`cli_example` – runs :func:`lib_module_loader.examples.run_example`.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer: it calls the composition root and the example, never the
adapters directly. ``lib_cli_exit_tools`` centralises exit codes and
traceback rendering so loader errors surface consistently.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import get_export, load_module, public_exports, resolve_target
from .examples import run_example

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_DISTRIBUTION: Final[str] = "lib_module_loader"


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` when not installed."""

    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Load Python modules from file paths with error-first callbacks",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=_DISTRIBUTION,
    message="lib_module_loader version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        click.echo(f"{_DISTRIBUTION} (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _DISTRIBUTION)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("resolve", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("base_dir", type=click.Path(path_type=Path, file_okay=False, dir_okay=True))
@click.argument("segments", nargs=-1, required=True)
def cli_resolve(base_dir: Path, segments: Sequence[str]) -> None:
    """Print the absolute path of SEGMENTS joined under BASE_DIR.

    The target does not need to exist.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["resolve", "/repo/examples", "fixtures", "module", "hello.js"])
    >>> result.output.strip()
    '/repo/examples/fixtures/module/hello.js'
    """

    click.echo(resolve_target(base_dir, *segments))


@cli.command("load", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument(
    "path",
    type=click.Path(path_type=Path, file_okay=True, dir_okay=False),
)
@click.option(
    "--call",
    "calls",
    multiple=True,
    help="Zero-argument export to call after loading (repeatable, runs in order)",
)
@click.option(
    "--register/--no-register",
    default=None,
    help="Keep the module in sys.modules (defaults to LIB_MODULE_LOADER_REGISTER)",
)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
def cli_load(path: Path, calls: Sequence[str], register: Optional[bool], indent: Optional[int]) -> None:
    """Load the module at PATH and print its exports as JSON.

    Without ``--call`` the output lists the public callables the module
    defines. With ``--call`` each named export runs in order and the output
    maps names to their ``repr``-safe return values. Loader errors propagate
    to the shared exit handler.
    """

    module = load_module(path, register=register)
    if not calls:
        payload: dict[str, object] = {
            "module": module.__name__,
            "path": module.__file__,
            "exports": public_exports(module),
        }
        click.echo(json.dumps(payload, indent=indent))
        return

    results: dict[str, object] = {}
    for name in calls:
        results[name] = get_export(module, name)()
    click.echo(json.dumps(results, indent=indent, default=repr))


@cli.command("example", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--base-dir",
    type=click.Path(path_type=Path, exists=True, file_okay=False, dir_okay=True, readable=True),
    default=None,
    help="Directory containing fixtures/module/hello.py (defaults to the bundled examples)",
)
def cli_example(base_dir: Optional[Path]) -> None:
    """Run the bundled example: resolve the fixture, load it, call hello()."""

    run_example(base_dir)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=_DISTRIBUTION,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
