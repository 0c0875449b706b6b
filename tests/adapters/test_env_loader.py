"""Environment adapter tests covering prefix filtering and settings coercion."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from lib_module_loader.adapters.env.default import DefaultEnvLoader, LoaderSettings, default_env_prefix, load_settings


def test_default_prefix() -> None:
    assert default_env_prefix() == "LIB_MODULE_LOADER"
    assert default_env_prefix("my-app") == "MY_APP"


def test_settings_defaults_when_environment_is_empty() -> None:
    assert load_settings({}) == LoaderSettings(base_dir=None, register=False)


def test_settings_read_prefixed_values() -> None:
    environ = {
        "LIB_MODULE_LOADER_BASE_DIR": "/srv/examples",
        "LIB_MODULE_LOADER_REGISTER": "yes",
        "UNRELATED_BASE_DIR": "/ignored",
    }

    settings = load_settings(environ)

    assert settings.base_dir == "/srv/examples"
    assert settings.register is True


def test_base_dir_is_not_coerced() -> None:
    settings = load_settings({"LIB_MODULE_LOADER_BASE_DIR": "1e3"})
    assert settings.base_dir == "1e3"


def test_empty_base_dir_counts_as_unset() -> None:
    assert load_settings({"LIB_MODULE_LOADER_BASE_DIR": ""}).base_dir is None


def test_custom_prefix() -> None:
    loader = DefaultEnvLoader(environ={"DEMO_REGISTER": "on", "DEMO_BASE_DIR": "/demo"})
    assert loader.settings("DEMO") == LoaderSettings(base_dir="/demo", register=True)


REGISTER_VALUES = st.sampled_from(["true", "TRUE", "1", "yes", "on", "false", "0", "no", "off", "none"])
TRUTHY = {"true", "1", "yes", "on"}


@given(REGISTER_VALUES)
def test_register_flag_coercion(raw: str) -> None:
    settings = load_settings({"LIB_MODULE_LOADER_REGISTER": raw})
    assert settings.register is (raw.lower() in TRUTHY)


@given(st.dictionaries(st.sampled_from(["OTHER", "PATH", "HOME_DIR"]), st.text(max_size=5), max_size=3))
def test_unprefixed_variables_are_ignored(environ: dict[str, str]) -> None:
    assert DefaultEnvLoader(environ=environ).load() == {}


@given(st.sampled_from(["nan", "inf", "-inf", "2", "enabled", "y"]))
def test_undocumented_register_spellings_are_false(raw: str) -> None:
    assert load_settings({"LIB_MODULE_LOADER_REGISTER": raw}).register is False
