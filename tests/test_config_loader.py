"""Testy odczytu konfiguracji trackera z package.json."""

import json

import pytest

from css_tracker.core.blacklist import ExclusionCategory
from css_tracker.core.errors import ConfigurationError
from css_tracker.services.config_loader import (
    DEFAULT_EXCLUDED_PATHS,
    TRACK_SCRIPT_NAME,
    init_manifest,
    load_config,
    parse_config,
)


def test_defaults_when_section_is_empty(tmp_path, write_manifest):
    write_manifest(tracker={})

    config = load_config(tmp_path)

    assert config.check_declarations is True
    assert config.duplicate_definitions is True
    assert config.css_files == [".css", ".scss"]
    assert config.front_files == [".tsx", ".jsx", ".html"]
    assert config.output_log == "./logs.txt"
    assert config.blacklist.css_paths == []


def test_camel_case_keys_and_flag_mapping(tmp_path, write_manifest):
    write_manifest(
        tracker={
            "checkDeclarations": False,
            "checkDefinitionPaths": True,
            "checkDefinitions": False,
            "listExpressions": True,
            "duplicateDefinitions": False,
            "cssFiles": [".less"],
            "outputLog": "reports/css.txt",
        }
    )

    config = load_config(tmp_path)
    options = config.analysis_options()

    assert config.css_files == [".less"]
    assert config.output_log == "reports/css.txt"
    assert options.unused_definitions is False
    assert options.relocation_suggestions is True
    assert options.missing_definitions is False
    assert options.expressions is True
    assert options.duplicate_definitions is False


def test_historical_blacklist_names_map_to_canonical_fields():
    config = parse_config(
        {
            "blacklist": {
                "css": ["./vendor"],
                "front": ["./legacy"],
                "notUsedCss": ["./themes"],
                "duplicateCss": ["./generated"],
                "cssClasses": ["sr-only"],
            }
        }
    )

    blacklist = config.blacklist
    assert blacklist.css_paths == ["./vendor"]
    assert blacklist.front_paths == ["./legacy"]
    assert blacklist.move_css_paths == ["./themes"]
    assert blacklist.duplicate_css_paths == ["./generated"]
    assert blacklist.css_classes == ["sr-only"]


def test_blacklist_to_core_blacklist(tmp_path):
    config = parse_config(
        {"blacklist": {"cssPaths": ["./vendor"], "moveCssPaths": ["./build"]}}
    )

    blacklist = config.blacklist.to_blacklist(tmp_path)

    assert blacklist.excludes(ExclusionCategory.CSS, "vendor/a.css")
    assert blacklist.excludes(ExclusionCategory.MOVE, "build/a.css")
    assert not blacklist.excludes(ExclusionCategory.MOVE, "vendor/a.css")


def test_unknown_blacklist_key_is_rejected():
    with pytest.raises(ConfigurationError):
        parse_config({"blacklist": {"cssPath": []}})


def test_wrong_type_is_rejected():
    with pytest.raises(ConfigurationError):
        parse_config({"cssFiles": "css"})


def test_non_object_section_is_rejected():
    with pytest.raises(ConfigurationError):
        parse_config(["cssFiles"])


def test_missing_manifest(tmp_path):
    with pytest.raises(ConfigurationError, match="Manifest not found"):
        load_config(tmp_path)


def test_invalid_json_manifest(tmp_path):
    (tmp_path / "package.json").write_text("{ not json", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        load_config(tmp_path)


def test_undecodable_manifest(tmp_path):
    (tmp_path / "package.json").write_bytes(b'{"name": "\xff"}')

    with pytest.raises(ConfigurationError, match="Cannot decode"):
        load_config(tmp_path)


def test_missing_tracker_section(tmp_path, write_manifest):
    write_manifest()

    with pytest.raises(ConfigurationError, match="cssTracker"):
        load_config(tmp_path)


def test_explicit_manifest_path(tmp_path):
    manifest = tmp_path / "config" / "tracker.json"
    manifest.parent.mkdir()
    manifest.write_text(json.dumps({"cssTracker": {"cssFiles": [".sass"]}}), encoding="utf-8")

    assert load_config(tmp_path, manifest).css_files == [".sass"]


def test_init_manifest_adds_defaults_and_script(tmp_path, write_manifest):
    manifest = write_manifest()

    assert init_manifest(tmp_path) is True

    data = json.loads(manifest.read_text(encoding="utf-8"))
    assert TRACK_SCRIPT_NAME in data["scripts"]
    assert data["cssTracker"]["blacklist"]["frontPaths"] == DEFAULT_EXCLUDED_PATHS
    assert data["name"] == "demo-app"
    # Blok domyślny musi przechodzić walidację
    assert load_config(tmp_path).blacklist.move_css_paths == DEFAULT_EXCLUDED_PATHS


def test_init_manifest_keeps_existing_section(tmp_path, write_manifest):
    manifest = write_manifest(tracker={"cssFiles": [".less"]})

    assert init_manifest(tmp_path) is False

    data = json.loads(manifest.read_text(encoding="utf-8"))
    assert data["cssTracker"] == {"cssFiles": [".less"]}
    assert TRACK_SCRIPT_NAME in data["scripts"]
