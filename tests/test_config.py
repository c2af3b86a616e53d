import json

import pytest

import catalogs
from config import (ConfigError, default_config, deep_merge, load_config, validate_config,
                    config_from_dict)


def test_builtin_catalogs_are_consistent(config):
    assert validate_config(config) == []
    assert len(config.version) == 64


def test_version_tracks_bundle_content():
    bundle = catalogs.default_bundle()
    assert config_from_dict(bundle).version == default_config().version
    bundle["economy"]["tickMs"] = 1000
    assert config_from_dict(bundle).version != default_config().version


def test_deep_merge_only_recurses_into_dicts():
    base = {"a": {"x": 1, "y": 2}, "b": [1, 2]}
    merged = deep_merge(base, {"a": {"y": 3}, "b": [9]})
    assert merged == {"a": {"x": 1, "y": 3}, "b": [9]}
    assert base["a"]["y"] == 2


def test_partial_economy_file_is_merged(tmp_path):
    path = tmp_path / "bundle.json"
    path.write_text(json.dumps({"economy": {"tickMs": 1000}}), encoding="utf-8")
    config = load_config(str(path))
    assert config.economy.tick_ms == 1000
    assert config.economy.event_base_chance == default_config().economy.event_base_chance


def test_directory_of_catalog_files(tmp_path):
    (tmp_path / "economy.json").write_text(json.dumps({"tickMs": 250}), encoding="utf-8")
    assert load_config(str(tmp_path)).economy.tick_ms == 250


def test_unreadable_config_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{oops", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(path))
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "missing.json"))


def test_strict_mode_rejects_unknown_effect_keys(tmp_path, caplog):
    projects = catalogs.default_bundle()["projects"]
    projects[0]["effects"] = {"magic": 5}
    path = tmp_path / "bundle.json"
    path.write_text(json.dumps({"projects": projects}), encoding="utf-8")

    config = load_config(str(path))
    assert any("unknown effect key 'magic'" in issue for issue in validate_config(config))
    assert "magic" in caplog.text

    with pytest.raises(ConfigError):
        load_config(str(path), strict=True)
