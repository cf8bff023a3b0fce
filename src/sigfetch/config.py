"""Configuration management"""

import copy
import os
from pathlib import Path
from typing import Any

import tomli
import tomli_w

from sigfetch.utils.logging import get_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = "SIGFETCH_CONFIG"

DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    "general": {
        "log_level": "INFO",
        "output_dir": ".",
    },
    "network": {
        "timeout": 30.0,
        "max_retries": 3,
        "rate_limit": 60,
        "time_window": 60.0,
    },
    "verification": {
        "gpg_binary": "gpg",
        "gpg_home": "",
        "gpg_timeout": 30,
    },
    "trust": {
        "fingerprints": [],
    },
}


def default_config_path() -> Path:
    """Config file location, honouring the SIGFETCH_CONFIG override"""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".sigfetch" / "config.toml"


class Config:
    """TOML-backed configuration merged over defaults"""

    def __init__(self, config_path: Path | None = None):
        self.config_path = Path(config_path) if config_path else default_config_path()
        self.data = copy.deepcopy(DEFAULT_CONFIG)
        self.load()

    def load(self) -> None:
        """Load the config file if it exists"""
        if not self.config_path.exists():
            return

        with open(self.config_path, "rb") as f:
            loaded = tomli.load(f)

        for section, values in loaded.items():
            if isinstance(values, dict):
                self.data.setdefault(section, {}).update(values)
            else:
                logger.warning("Ignoring non-table entry '%s' in %s", section, self.config_path)

    def save(self) -> None:
        """Write the current configuration to disk"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "wb") as f:
            tomli_w.dump(self.data, f)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get a configuration value"""
        return self.data.get(section, {}).get(key, default)

    def set(self, section: str, key: str, value: Any) -> None:
        """Set a configuration value in memory"""
        self.data.setdefault(section, {})[key] = value
