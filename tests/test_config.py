"""Tests for configuration module."""

import json

import pytest

from olx_enhancer.config import (
    ENHANCER_CONFIG,
    SETTING_KEYS,
    EnhancerSettings,
    ProxyConfig,
    SettingsStore,
    get_enhancer_settings,
    get_proxy_config,
    parse_bool,
)


def test_enhancer_config_exists():
    """Test that ENHANCER_CONFIG dictionary is properly defined."""
    assert isinstance(ENHANCER_CONFIG, dict)
    assert "settings" in ENHANCER_CONFIG
    assert "proxy" in ENHANCER_CONFIG
    assert set(ENHANCER_CONFIG["settings"]) == set(SETTING_KEYS)


def test_enhancer_settings_defaults():
    """Test that EnhancerSettings has correct default values."""
    settings = EnhancerSettings()

    assert settings.rent_category_id == "15"
    assert settings.show_rent_in_price_label is True
    assert settings.show_listing_age is True
    assert settings.show_base_price_in_title is True
    assert settings.show_seller_type is True
    assert settings.show_filter_indicator is True
    assert settings.filter_by_true_price is True
    assert settings.hide_agencies is False
    assert settings.debug is False


def test_get_enhancer_settings():
    """Test that get_enhancer_settings returns proper EnhancerSettings object."""
    settings = get_enhancer_settings()

    assert isinstance(settings, EnhancerSettings)
    assert settings.rent_category_id


def test_get_proxy_config():
    """Test that get_proxy_config returns proper ProxyConfig object."""
    config = get_proxy_config()

    assert isinstance(config, ProxyConfig)
    assert config.upstream_base_url.startswith("http")
    assert config.port > 0


@pytest.mark.parametrize("value, expected", [
    (True, True),
    (False, False),
    ("true", True),
    (" YES ", True),
    ("1", True),
    ("on", True),
    ("false", False),
    ("0", False),
    ("", False),
    (None, False),
])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


def test_from_mapping_accepts_record_keys_and_attribute_names():
    settings = EnhancerSettings.from_mapping({
        "HIDE_AGENCIES": True,
        "show_listing_age": "false",
        "RENT_CATEGORY_ID": " 1307 ",
        "UNKNOWN_TOGGLE": True,
    })

    assert settings.hide_agencies is True
    assert settings.show_listing_age is False
    assert settings.rent_category_id == "1307"
    assert settings.show_seller_type is True


def test_settings_are_immutable():
    settings = EnhancerSettings()

    with pytest.raises(AttributeError):
        settings.hide_agencies = True


def test_mapping_round_trip():
    settings = EnhancerSettings(hide_agencies=True, show_seller_type=False, rent_category_id="9")

    assert EnhancerSettings.from_mapping(settings.to_mapping()) == settings
    assert set(settings.to_mapping()) == set(SETTING_KEYS)


def test_merged_keeps_unset_values():
    base = EnhancerSettings(show_listing_age=False)

    merged = base.merged({"HIDE_AGENCIES": True})

    assert merged.hide_agencies is True
    assert merged.show_listing_age is False
    assert base.hide_agencies is False


def test_store_without_file_returns_defaults(tmp_path):
    defaults = EnhancerSettings(debug=True)
    store = SettingsStore(str(tmp_path / "settings.json"), defaults)

    assert store.load() == defaults


def test_store_save_and_load(tmp_path):
    store = SettingsStore(str(tmp_path / "nested" / "settings.json"), EnhancerSettings())
    settings = EnhancerSettings(hide_agencies=True, show_listing_age=False)

    store.save(settings)

    assert store.load() == settings
    saved = json.loads((tmp_path / "nested" / "settings.json").read_text(encoding="utf-8"))
    assert saved["HIDE_AGENCIES"] is True


def test_store_merges_partial_record_over_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"SHOW_SELLER_TYPE": False}), encoding="utf-8")

    settings = SettingsStore(str(path), EnhancerSettings(hide_agencies=True)).load()

    assert settings.show_seller_type is False
    assert settings.hide_agencies is True


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '"text"'])
def test_store_with_corrupt_record_returns_defaults(tmp_path, content):
    path = tmp_path / "settings.json"
    path.write_text(content, encoding="utf-8")
    defaults = EnhancerSettings()

    assert SettingsStore(str(path), defaults).load() == defaults


def test_store_reset(tmp_path):
    path = tmp_path / "settings.json"
    defaults = EnhancerSettings()
    store = SettingsStore(str(path), defaults)
    store.save(EnhancerSettings(debug=True))

    assert store.reset() == defaults
    assert not path.exists()
    assert store.load() == defaults
