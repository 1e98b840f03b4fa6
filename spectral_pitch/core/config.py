"""Configuration management for spectral_pitch components."""

from typing import Dict, Any, Optional
import copy
import json
import os
from pathlib import Path

from ..logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIGS: Dict[str, Dict[str, Any]] = {
    "pitch_detector": {
        "sample_rate": 44100,
        "block_size": 4096,
        "threshold_hz": 50.0,
        # "guitar", "chromatic" or a list of [name, frequency] pairs
        "note_table": "guitar",
        "use_flats": False,
        "selection": "magnitude",
    },
    "block_source": {
        "gain": 1.0,
    },
}


class ConfigManager:
    """Loads and persists JSON configuration files, one per component."""

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Directory to store configuration files, or None to use
                ~/.config/spectral_pitch
        """
        if config_dir is None:
            home = os.path.expanduser("~")
            config_dir = os.path.join(home, ".config", "spectral_pitch")

        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.default_configs = copy.deepcopy(DEFAULT_CONFIGS)

        # Load existing configurations or create default ones
        self.configs: Dict[str, Dict[str, Any]] = {}
        for config_name, default_config in self.default_configs.items():
            self.configs[config_name] = self.load_config(config_name, default_config)

    def _config_file(self, name: str) -> Path:
        return self.config_dir / f"{name}.json"

    def load_config(self, name: str, default_config: Dict[str, Any]) -> Dict[str, Any]:
        """Load configuration from file or create default.

        Keys missing from the file are filled in from ``default_config``. A
        file that cannot be read or parsed is logged and the defaults are used.

        Args:
            name: Configuration name
            default_config: Default configuration to use if file doesn't exist

        Returns:
            Configuration dictionary
        """
        config_file = self._config_file(name)

        if not config_file.exists():
            config = copy.deepcopy(default_config)
            self.save_config(name, config)
            return config

        try:
            with open(config_file, "r") as f:
                config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading configuration from {config_file}: {e}")
            return copy.deepcopy(default_config)

        if not isinstance(config, dict):
            logger.error(f"Configuration in {config_file} is not an object, using defaults")
            return copy.deepcopy(default_config)

        logger.info(f"Loaded configuration from {config_file}")
        for key, value in default_config.items():
            config.setdefault(key, copy.deepcopy(value))
        return config

    def save_config(self, name: str, config: Dict[str, Any]) -> bool:
        """Save configuration to file.

        Returns:
            True if saved successfully, False otherwise
        """
        config_file = self._config_file(name)

        try:
            with open(config_file, "w") as f:
                json.dump(config, f, indent=2)
        except (OSError, TypeError) as e:
            logger.error(f"Error saving configuration to {config_file}: {e}")
            return False

        logger.info(f"Saved configuration to {config_file}")
        return True

    def get_config(self, name: str) -> Dict[str, Any]:
        """Get a copy of the configuration called ``name`` (empty if unknown)."""
        return copy.deepcopy(self.configs.get(name, {}))

    def update_config(self, name: str, updates: Dict[str, Any]) -> bool:
        """Update configuration and save to file.

        Returns:
            True if updated and saved successfully, False otherwise
        """
        if name not in self.configs:
            logger.error(f"Unknown configuration: {name}")
            return False

        self.configs[name].update(updates)
        return self.save_config(name, self.configs[name])

    def reset_config(self, name: str) -> bool:
        """Reset configuration to default and save it.

        Returns:
            True if reset successfully, False otherwise
        """
        if name not in self.default_configs:
            logger.error(f"Unknown configuration: {name}")
            return False

        self.configs[name] = copy.deepcopy(self.default_configs[name])
        return self.save_config(name, self.configs[name])
