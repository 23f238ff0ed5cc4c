# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

import os

import pytest

from unitdiff.context import ExtractionConfig, load_extraction_config
from unitdiff.core.config.config_loader import ConfigLoader
from unitdiff.core.exceptions import ConfigurationError

ENV_PREFIX = "UNITDIFF_TEST_"

# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def config_files(tmp_path):
    local_path = tmp_path / "local.toml"
    global_path = tmp_path / "global.toml"
    return local_path, global_path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.upper().startswith(ENV_PREFIX):
            monkeypatch.delenv(key)


def _load(input_args, local_path, global_path, custom_path=None):
    return ConfigLoader.get_full_config(
        ExtractionConfig,
        input_args,
        local_path,
        ENV_PREFIX,
        global_path,
        custom_path,
    )


# -----------------------------------------------------------------------------
# Priority
# -----------------------------------------------------------------------------


def test_defaults_when_no_source_is_present(config_files):
    config, sources, used_defaults = _load({}, *config_files)

    assert config == ExtractionConfig()
    assert sources == []
    assert used_defaults


def test_sources_are_merged_by_priority(config_files, monkeypatch, tmp_path):
    local_path, global_path = config_files
    global_path.write_text('range_policy = "body"\nmax_workers = 8\nverbose = true\n')
    monkeypatch.setenv(ENV_PREFIX + "MAX_WORKERS", "4")
    local_path.write_text("raw_fallback = true\n")
    custom_path = tmp_path / "custom.toml"
    custom_path.write_text("raw_fallback = false\nstrict_syntax = false\n")

    config, sources, _ = _load(
        {"fetch_remote": False}, local_path, global_path, custom_path
    )

    assert config.fetch_remote is False
    # custom config beats the local one
    assert config.raw_fallback is False
    assert config.strict_syntax is False
    assert config.max_workers == 4
    assert config.range_policy == "body"
    assert config.verbose is True
    assert sources == [
        "Input Args",
        "Custom Config",
        "Environment Variables",
        "Global Config",
    ]


def test_env_values_are_coerced(config_files, monkeypatch):
    monkeypatch.setenv(ENV_PREFIX + "STRICT_SYNTAX", "false")
    monkeypatch.setenv(ENV_PREFIX + "RANGE_POLICY", "body")

    config, sources, _ = _load({}, *config_files)

    assert config.strict_syntax is False
    assert config.range_policy == "body"
    assert sources == ["Environment Variables"]


def test_unknown_keys_are_ignored(config_files):
    local_path, global_path = config_files
    local_path.write_text('theme = "dark"\nsilent = true\n')

    config, _, _ = _load({}, local_path, global_path)

    assert config.silent is True


def test_invalid_toml_is_skipped(config_files):
    local_path, global_path = config_files
    local_path.write_text("this is = = not toml")

    config, sources, _ = _load({}, local_path, global_path)

    assert config == ExtractionConfig()
    assert sources == []


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "input_args",
    [
        {"range_policy": "lines"},
        {"max_workers": 0},
        {"max_workers": "many"},
    ],
)
def test_invalid_values_raise(config_files, input_args):
    with pytest.raises(ConfigurationError):
        _load(input_args, *config_files)


def test_missing_custom_config_raises(config_files, tmp_path):
    with pytest.raises(ConfigurationError):
        _load({}, *config_files, custom_path=tmp_path / "missing.toml")


# -----------------------------------------------------------------------------
# load_extraction_config
# -----------------------------------------------------------------------------


def test_load_extraction_config_drops_unset_args(config_files, monkeypatch):
    local_path, global_path = config_files
    local_path.write_text("max_workers = 3\n")
    monkeypatch.setattr("unitdiff.context.LOCAL_CONFIG_FILE", local_path)
    monkeypatch.setattr("unitdiff.context.GLOBAL_CONFIG_FILE", global_path)
    monkeypatch.setattr("unitdiff.context.ENV_APP_PREFIX", ENV_PREFIX)

    config = load_extraction_config({"max_workers": None, "silent": True})

    assert config.max_workers == 3
    assert config.silent is True
