"""Tests for the dict/YAML config loader."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from input_mask import ConfigError, Selection, create_editor, load_config, load_from_yaml


def test_load_config_nested():
    cfg = load_config({"input_mask": {"pattern": "11-11", "revealing": True, "value": "12"}})
    assert cfg["pattern"] == "11-11"
    assert cfg["is_revealing_mask"] is True
    assert cfg["value"] == "12"
    assert cfg["selection"] == Selection(0, 0)
    assert cfg["placeholder_char"] == "_"


def test_load_config_selection():
    cfg = load_config({"pattern": "1111", "selection": {"start": 1, "end": 3}})
    assert cfg["selection"] == Selection(1, 3)


def test_create_editor_from_flat_dict():
    editor = create_editor({"pattern": "(111) 111", "value": "555123"})
    assert editor.get_value() == "(555) 123"


def test_create_editor_from_normalized_config():
    editor = create_editor(load_config({"pattern": "1111", "placeholder_char": "*"}))
    assert editor.get_value() == "****"


def test_format_characters_from_config():
    editor = create_editor({
        "pattern": "hh-##",
        "value": "ab",
        "format_characters": {
            "h": {"regex": "[0-9a-fA-F]", "transform": "upper"},
            "#": None,
        },
    })
    assert editor.get_value() == "AB-##"


def test_missing_pattern():
    with pytest.raises(ConfigError):
        load_config({"value": "12"})


def test_bad_regex():
    with pytest.raises(ConfigError):
        load_config({"pattern": "h", "format_characters": {"h": {"regex": "["}}})


def test_unknown_transform():
    with pytest.raises(ConfigError):
        load_config({"pattern": "h", "format_characters": {"h": {"regex": ".", "transform": "title"}}})


def test_format_character_without_regex():
    with pytest.raises(ConfigError):
        load_config({"pattern": "h", "format_characters": {"h": {"transform": "upper"}}})


def test_revealing_flag_must_be_boolean():
    with pytest.raises(ConfigError):
        load_config({"pattern": "11", "revealing": "false"})
    with pytest.raises(ConfigError):
        load_config({"pattern": "11", "is_revealing_mask": 1})


def test_load_from_yaml(tmp_path):
    path = tmp_path / "mask.yaml"
    path.write_text(
        "input_mask:\n"
        "  pattern: '111-1111 x 111'\n"
        "  revealing: true\n"
        "  value: '4761'\n"
        "  format_characters:\n"
        "    h:\n"
        "      regex: '[0-9a-f]'\n"
        "      transform: upper\n"
    )
    cfg = load_from_yaml(path)
    assert cfg["is_revealing_mask"] is True
    assert set(cfg["format_characters"]) == {"h"}
    editor = create_editor(cfg)
    assert editor.get_value() == "476-1"


def test_load_from_yaml_rejects_non_mapping(tmp_path):
    path = tmp_path / "mask.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError):
        load_from_yaml(path)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
