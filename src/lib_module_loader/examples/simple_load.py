"""Minimal demonstration of the error-first loading convention.

Purpose
-------
Resolve the bundled fixture (``fixtures/module/hello.py`` next to this file),
hand it to :func:`lib_module_loader.core.load`, and call ``hello()`` on the
exports once loading completes.

Contents
    - ``FIXTURE_SEGMENTS``: path components of the fixture below the base
      directory.
    - ``fixture_path``: resolve the fixture against an explicit, configured,
      or default base directory.
    - ``run_example``: the resolve, load, ``hello()`` sequence.

System Role
-----------
Exercised by ``lib_module_loader example`` and by the example test-suite. The
loader is injectable so callers can observe the callback contract with a fake.
"""

from __future__ import annotations

import os
from functools import partial
from typing import Any, Callable, Final, Mapping

from ..adapters.env.default import load_settings
from ..adapters.path_resolvers.default import resolve_target, script_dir
from ..core import get_export, load
from ..observability import log_info

FIXTURE_SEGMENTS: Final[tuple[str, ...]] = ("fixtures", "module", "hello.py")

Loader = Callable[[str, Callable[[BaseException | None, Any], Any]], Any]


def fixture_path(
    base_dir: str | os.PathLike[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the absolute path of the hello fixture.

    The base directory is taken from *base_dir*, then from
    ``LIB_MODULE_LOADER_BASE_DIR``, then from the directory of this module.

    Examples
    --------
    >>> fixture_path('/repo/examples', environ={})
    '/repo/examples/fixtures/module/hello.py'
    >>> fixture_path(environ={'LIB_MODULE_LOADER_BASE_DIR': '/srv/demo'})
    '/srv/demo/fixtures/module/hello.py'
    """

    if base_dir is None:
        base_dir = load_settings(environ).base_dir or script_dir(__file__)
    return resolve_target(base_dir, *FIXTURE_SEGMENTS)


def run_example(
    base_dir: str | os.PathLike[str] | None = None,
    *,
    loader: Loader | None = None,
    environ: Mapping[str, str] | None = None,
) -> Any:
    """Load the hello fixture and call its ``hello`` export.

    What
    ----
    The completion callback re-raises any loader error instead of calling
    ``hello`` on missing exports, so a failed load surfaces as the
    :class:`~lib_module_loader.domain.errors.LoaderError` that caused it.

    *environ* feeds both the base directory and the ``register`` flag of the
    default loader. A custom *loader* receives only ``(path, callback)``.

    Returns
    -------
    Any
        Whatever ``hello()`` returned, or ``None`` when *loader* never
        completed.

    Examples
    --------
    >>> run_example(environ={})
    hello
    'hello'
    """

    settings = load_settings(environ)
    if base_dir is None:
        base_dir = settings.base_dir or script_dir(__file__)
    target = resolve_target(base_dir, *FIXTURE_SEGMENTS)
    if loader is None:
        loader = partial(load, register=settings.register)
    outcome: dict[str, Any] = {}

    def on_complete(error: BaseException | None, exports: Any) -> None:
        if error is not None:
            raise error
        outcome["result"] = get_export(exports, "hello")()

    loader(target, on_complete)
    log_info("example_completed", stage="example", path=target, completed="result" in outcome)
    return outcome.get("result")
