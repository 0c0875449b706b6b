"""Environment variable adapter.

Purpose
-------
Translate process environment variables into :class:`LoaderSettings`, the
only configuration surface the loader and the example script consult.

Key behaviours
--------------
* Enforces a prefix (``default_env_prefix``) so only relevant keys are
  captured (``LIB_MODULE_LOADER_BASE_DIR``, ``LIB_MODULE_LOADER_REGISTER``).
* Performs light type coercion for common scalar types (bools, ints, floats,
  ``null``/``none``).
* Emits structured logging via :mod:`lib_module_loader.observability`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from ...observability import log_debug, log_error

ENV_SLUG = "lib-module-loader"
_TRUE_FLAGS = frozenset({"true", "1", "yes", "on"})
_FALSE_FLAGS = frozenset({"false", "0", "no", "off"})


def default_env_prefix(slug: str = ENV_SLUG) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('lib-module-loader')
    'LIB_MODULE_LOADER'
    """

    return slug.replace("-", "_").upper()


@dataclass(frozen=True, slots=True)
class LoaderSettings:
    """Immutable view of the environment-provided loader configuration.

    Attributes
    ----------
    base_dir:
        Directory the example script resolves its fixture against, or
        ``None`` to use the script's own directory.
    register:
        Keep loaded modules in :data:`sys.modules` after a successful load.
    """

    base_dir: str | None = None
    register: bool = False


class DefaultEnvLoader:
    """Load environment variables that belong to the loader namespace."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability."""

        self._environ = os.environ if environ is None else environ

    def load(self, prefix: str | None = None) -> dict[str, object]:
        """Return lower-cased keys and coerced values for variables under *prefix*.

        Examples
        --------
        >>> env = {'DEMO_REGISTER': 'true', 'DEMO_BASE_DIR': '/srv', 'OTHER': 'x'}
        >>> DefaultEnvLoader(environ=env).load('DEMO') == {'register': True, 'base_dir': '/srv'}
        True
        """

        prefix = default_env_prefix() if prefix is None else prefix
        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        collected: dict[str, object] = {}
        for key, value in self._environ.items():
            if prefix and not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :] if prefix else key
            if not stripped:
                continue
            collected[stripped.lower()] = _coerce(value)
        log_debug("env_variables_loaded", stage="config", path=None, keys=sorted(collected.keys()))
        return collected

    def settings(self, prefix: str | None = None) -> LoaderSettings:
        """Return :class:`LoaderSettings` built from the prefixed variables.

        Unknown keys are ignored. ``BASE_DIR`` is taken verbatim (paths must not
        be coerced to numbers) and empty values count as unset.

        Examples
        --------
        >>> DefaultEnvLoader(environ={'LIB_MODULE_LOADER_REGISTER': '1'}).settings()
        LoaderSettings(base_dir=None, register=True)
        """

        prefix = default_env_prefix() if prefix is None else prefix.rstrip("_")
        base_dir = self._environ.get(f"{prefix}_BASE_DIR") or None
        register = _as_flag(self._environ.get(f"{prefix}_REGISTER"), name=f"{prefix}_REGISTER")
        log_debug("loader_settings_loaded", stage="config", path=base_dir, register=register)
        return LoaderSettings(base_dir=base_dir, register=register)


def load_settings(environ: Mapping[str, str] | None = None) -> LoaderSettings:
    """Shortcut for ``DefaultEnvLoader(environ=environ).settings()``."""

    return DefaultEnvLoader(environ=environ).settings()


def _as_flag(raw: str | None, *, name: str) -> bool:
    """Interpret a raw environment value as a flag.

    Only ``true/false/1/0/yes/no/on/off`` (any case, surrounding blanks
    ignored) are recognised. Unset or empty values mean ``False``; anything
    else is logged and treated as ``False``.

    Examples
    --------
    >>> [_as_flag(raw, name="X") for raw in ("TRUE", "1", " on ", "no", None, "nan")]
    [True, True, True, False, False, False]
    """

    if raw is None or not raw.strip():
        return False
    lowered = raw.strip().lower()
    if lowered in _TRUE_FLAGS:
        return True
    if lowered not in _FALSE_FLAGS:
        log_error("env_value_invalid", stage="config", path=None, variable=name, value=raw)
    return False


def _coerce(value: str) -> object:
    """Coerce textual environment values to Python primitives where possible.

    Examples
    --------
    >>> _coerce('true'), _coerce('10'), _coerce('3.5'), _coerce('hello')
    (True, 10, 3.5, 'hello')
    """

    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    try:
        if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
            return int(value)
        return float(value)
    except ValueError:
        return value
