"""Filesystem path resolution for module targets.

Purpose
-------
Compute the absolute path of a module file from an explicit base directory
and an ordered sequence of path segments. Callers pass the base directory in
rather than relying on the current working directory or on ``__file__`` of
whoever happens to import this module.

Contents
--------
* :func:`resolve_target` – join and normalise a base directory with segments.
* :func:`script_dir` – directory containing a given script file.
"""

from __future__ import annotations

import os
from pathlib import Path

from ...observability import log_debug


def resolve_target(base_dir: str | os.PathLike[str], *segments: str | os.PathLike[str]) -> str:
    """Return the absolute, normalised path of *segments* under *base_dir*.

    Why
    ----
    The result must be deterministic for a given input so log entries and
    error messages can be correlated across runs. ``os.path.abspath`` anchors
    relative base directories at the current working directory and collapses
    ``.``/``..`` without touching the filesystem, so the target need not
    exist yet.

    Parameters
    ----------
    base_dir:
        Directory the segments are relative to.
    segments:
        Ordered path components such as ``"fixtures", "module", "hello.py"``.
        An absolute segment restarts the path, as with :func:`os.path.join`.

    Examples
    --------
    >>> resolve_target('/repo/examples', 'fixtures', 'module', 'hello.js')
    '/repo/examples/fixtures/module/hello.js'
    >>> resolve_target('/repo/examples', '..', 'lib', 'hello.py')
    '/repo/lib/hello.py'
    """

    joined = os.path.join(os.fspath(base_dir), *(os.fspath(segment) for segment in segments))
    target = os.path.abspath(joined)
    log_debug("module_resolved", stage="resolve", path=target, segments=len(segments))
    return target


def script_dir(file: str | os.PathLike[str]) -> Path:
    """Return the absolute directory containing *file* (typically ``__file__``).

    Examples
    --------
    >>> script_dir('/srv/app/run.py').as_posix().endswith('/srv/app')
    True
    """

    return Path(os.path.abspath(os.fspath(file))).parent
