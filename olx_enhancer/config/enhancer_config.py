"""Enhancer configuration settings for the OLX True Price Enhancer."""

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping
import os


TRUE_STRINGS = ("1", "true", "yes", "on")

# Flat record keys used by the persisted settings and the settings API
SETTING_KEYS = {
    "RENT_CATEGORY_ID": "rent_category_id",
    "SHOW_RENT_IN_PRICE_LABEL": "show_rent_in_price_label",
    "SHOW_LISTING_AGE": "show_listing_age",
    "SHOW_BASE_PRICE_IN_TITLE": "show_base_price_in_title",
    "SHOW_SELLER_TYPE": "show_seller_type",
    "SHOW_FILTER_INDICATOR": "show_filter_indicator",
    "FILTER_BY_TRUE_PRICE": "filter_by_true_price",
    "HIDE_AGENCIES": "hide_agencies",
    "DEBUG": "debug",
}

ENHANCER_STRINGS = {
    "SUCCESS_INDICATOR": "✅",
    "WARNING_INDICATOR": "⚠️",
    "PRIVATE_SELLER_TEXT": "🤵 Prywatne",
    "BUSINESS_SELLER_TEXT": "🏢 Agencja",
    "RENT_LABEL": "Czynsz",
    "ADDED_LABEL": "Dodano",
    "BASE_PRICE_LABEL": "cena bazowa",
    "CURRENCY": "zł",
}


def parse_bool(value: Any) -> bool:
    """Interpret a flag value coming from the environment or a JSON record."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUE_STRINGS


@dataclass(frozen=True)
class EnhancerSettings:
    """Immutable per-load snapshot of the enhancer toggles."""
    rent_category_id: str = "15"
    show_rent_in_price_label: bool = True
    show_listing_age: bool = True
    show_base_price_in_title: bool = True
    show_seller_type: bool = True
    show_filter_indicator: bool = True
    filter_by_true_price: bool = True
    hide_agencies: bool = False
    debug: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'EnhancerSettings':
        """Create settings from a flat record.

        Accepts both the upper-case record keys and the attribute names.
        Unknown keys are ignored; missing keys keep their defaults.

        Args:
            data: Flat mapping of setting names to values

        Returns:
            EnhancerSettings instance
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = SETTING_KEYS.get(key, key)
            if name not in known:
                continue
            if name == "rent_category_id":
                values[name] = str(value).strip()
            else:
                values[name] = parse_bool(value)
        return cls(**values)

    def to_mapping(self) -> Dict[str, Any]:
        """Convert settings to the flat upper-case record."""
        return {key: getattr(self, name) for key, name in SETTING_KEYS.items()}

    def merged(self, data: Mapping[str, Any]) -> 'EnhancerSettings':
        """Return a new snapshot with the given record applied on top."""
        return EnhancerSettings.from_mapping({**self.to_mapping(), **data})


@dataclass(frozen=True)
class ProxyConfig:
    """Rewriting proxy configuration."""
    upstream_base_url: str = "https://www.olx.pl"
    host: str = "127.0.0.1"
    port: int = 8080
    request_timeout_seconds: float = 30.0
    settings_path: str = "./olx_enhancer_settings.json"


# Default enhancer configuration
ENHANCER_CONFIG = {
    "settings": {
        "RENT_CATEGORY_ID": os.getenv("OLX_RENT_CATEGORY_ID", "15"),
        "SHOW_RENT_IN_PRICE_LABEL": parse_bool(os.getenv("OLX_SHOW_RENT_IN_PRICE_LABEL", "true")),
        "SHOW_LISTING_AGE": parse_bool(os.getenv("OLX_SHOW_LISTING_AGE", "true")),
        "SHOW_BASE_PRICE_IN_TITLE": parse_bool(os.getenv("OLX_SHOW_BASE_PRICE_IN_TITLE", "true")),
        "SHOW_SELLER_TYPE": parse_bool(os.getenv("OLX_SHOW_SELLER_TYPE", "true")),
        "SHOW_FILTER_INDICATOR": parse_bool(os.getenv("OLX_SHOW_FILTER_INDICATOR", "true")),
        "FILTER_BY_TRUE_PRICE": parse_bool(os.getenv("OLX_FILTER_BY_TRUE_PRICE", "true")),
        "HIDE_AGENCIES": parse_bool(os.getenv("OLX_HIDE_AGENCIES", "false")),
        "DEBUG": parse_bool(os.getenv("OLX_DEBUG", "false")),
    },
    "proxy": {
        "upstream_base_url": os.getenv("OLX_UPSTREAM_BASE_URL", "https://www.olx.pl"),
        "host": os.getenv("OLX_PROXY_HOST", "127.0.0.1"),
        "port": int(os.getenv("OLX_PROXY_PORT", "8080")),
        "request_timeout_seconds": float(os.getenv("OLX_REQUEST_TIMEOUT_SECONDS", "30")),
        "settings_path": os.getenv("OLX_SETTINGS_PATH", "./olx_enhancer_settings.json"),
    },
}


def get_enhancer_settings() -> EnhancerSettings:
    """Get default enhancer settings from configuration."""
    return EnhancerSettings.from_mapping(ENHANCER_CONFIG["settings"])


def get_proxy_config() -> ProxyConfig:
    """Get proxy settings from configuration."""
    return ProxyConfig(**ENHANCER_CONFIG["proxy"])
