"""Configuration module for the OLX True Price Enhancer."""

from .enhancer_config import (
    ENHANCER_CONFIG,
    ENHANCER_STRINGS,
    SETTING_KEYS,
    EnhancerSettings,
    ProxyConfig,
    get_enhancer_settings,
    get_proxy_config,
    parse_bool,
)
from .settings_store import SettingsStore

__all__ = [
    'ENHANCER_CONFIG',
    'ENHANCER_STRINGS',
    'SETTING_KEYS',
    'EnhancerSettings',
    'ProxyConfig',
    'SettingsStore',
    'get_enhancer_settings',
    'get_proxy_config',
    'parse_bool',
]
