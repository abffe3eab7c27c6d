"""
Persistent storage for the enhancer settings record.

Settings are kept as a flat JSON object and merged over the defaults on load,
so records written by older versions keep working when new toggles appear.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from olx_enhancer.config.enhancer_config import EnhancerSettings, get_enhancer_settings


logger = logging.getLogger(__name__)


class SettingsStore:
    """Loads and saves the flat settings record in a JSON file."""

    def __init__(self, path: str, defaults: Optional[EnhancerSettings] = None):
        self.path = Path(path)
        self.defaults = defaults or get_enhancer_settings()

    def load(self) -> EnhancerSettings:
        """Load saved settings merged over the defaults.

        A missing file or an unreadable record yields the defaults.

        Returns:
            EnhancerSettings snapshot for this load cycle
        """
        if not self.path.exists():
            logger.debug(f"No saved settings at {self.path}, using defaults")
            return self.defaults

        try:
            saved = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(saved, dict):
                raise ValueError(f"expected a JSON object, got {type(saved).__name__}")
        except (OSError, ValueError) as e:
            logger.warning(f"Error parsing saved settings in {self.path}, using defaults: {e}")
            return self.defaults

        settings = self.defaults.merged(saved)
        logger.debug(f"Settings loaded: {settings.to_mapping()}")
        return settings

    def save(self, settings: EnhancerSettings) -> None:
        """Write the settings record to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(settings.to_mapping(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        logger.debug(f"Settings saved: {settings.to_mapping()}")

    def reset(self) -> EnhancerSettings:
        """Remove the saved record and return the defaults."""
        if self.path.exists():
            self.path.unlink()
        return self.defaults
