"""Configuration for hexstack.

Settings are read from ``~/.hexstack/config.json`` (or the file named by
``HEXSTACK_CONFIG``). Missing keys fall back to defaults; unknown keys are
ignored so older releases can read newer files.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HEXSTACK_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".hexstack" / "config.json"


@dataclass
class HexstackConfig:
    """User-tunable settings.

    Timeouts apply to each external command individually, not to the
    whole build.
    """
    # External command timeouts (seconds)
    clone_timeout: int = 300
    init_timeout: int = 60
    refresh_timeout: int = 600

    # Self-update check
    check_for_updates: bool = True
    update_check_timeout: float = 3.0
    registry_url: str = "https://pypi.org/pypi/hexstack/json"

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "HexstackConfig":
        return cls(**{
            k: v for k, v in data.items()
            if k in cls.__dataclass_fields__
        })


def get_config_path() -> Path:
    """Return the config file location, honoring HEXSTACK_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config(path: Optional[Path] = None) -> HexstackConfig:
    """Load configuration from disk.

    Args:
        path: Config file (defaults to get_config_path())

    Returns:
        HexstackConfig, with defaults if the file is missing or unreadable
    """
    config_file = path or get_config_path()
    if not config_file.exists():
        return HexstackConfig()

    try:
        data = json.loads(config_file.read_text())
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Config file %s unreadable: %s. Using defaults.", config_file, e)
        return HexstackConfig()

    if not isinstance(data, dict):
        logger.warning("Config file %s is not a JSON object. Using defaults.", config_file)
        return HexstackConfig()

    return HexstackConfig.from_dict(data)
