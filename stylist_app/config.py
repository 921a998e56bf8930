"""Configuration helpers for the outfit stylist app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Dict, Mapping, Optional

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CONFIG_DIR = "config/environments"


@dataclass
class StylistConfig:
    """Runtime settings for outfit generation.

    ``default_exploration_level`` is applied when a request does not set its
    own exploration level; 0 keeps selection fully greedy.
    """

    default_exploration_level: float = 0.0
    log_level: str = DEFAULT_LOG_LEVEL
    environment: Optional[str] = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.default_exploration_level <= 1.0:
            raise ValueError("default_exploration_level must be between 0 and 1")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Optional[str]], environment: Optional[str] = None) -> "StylistConfig":
        """Build a config from string settings such as YAML or environment values."""

        raw_exploration = values.get("default_exploration_level") or "0"
        try:
            exploration = float(raw_exploration)
        except ValueError as exc:
            raise ValueError(f"Invalid default_exploration_level: {raw_exploration!r}") from exc
        log_level = (values.get("log_level") or DEFAULT_LOG_LEVEL).upper()
        return cls(default_exploration_level=exploration, log_level=log_level, environment=environment)

    @classmethod
    def from_env(cls) -> "StylistConfig":
        """Build a config from environment variables and an optional YAML file.

        ``APP_CONFIG_PATH`` names the file directly; otherwise ``APP_ENV``
        selects ``<STYLIST_CONFIG_DIR>/<env>.yaml``. Upper-cased environment
        variables (``DEFAULT_EXPLORATION_LEVEL``, ``LOG_LEVEL``) win over the file.
        """

        env_name = os.getenv("APP_ENV")
        path: Optional[Path] = None
        if os.getenv("APP_CONFIG_PATH"):
            path = Path(os.environ["APP_CONFIG_PATH"])
        elif env_name:
            path = Path(os.getenv("STYLIST_CONFIG_DIR", DEFAULT_CONFIG_DIR)) / f"{env_name}.yaml"

        settings: Dict[str, Optional[str]] = {}
        if path is not None and path.exists():
            settings.update(cls._load_yaml_config(path))
        for key in ("default_exploration_level", "log_level"):
            override = os.getenv(key.upper())
            if override is not None:
                settings[key] = override
        return cls.from_mapping(settings, environment=env_name)

    @staticmethod
    def _load_yaml_config(path: Path) -> Dict[str, str]:
        """Parse flat ``key: value`` YAML, ignoring comments and blank lines."""

        config: Dict[str, str] = {}
        for line in path.read_text().splitlines():
            key, sep, raw_value = line.split("#", 1)[0].partition(":")
            if not sep or not key.strip():
                continue
            config[key.strip()] = raw_value.strip().strip("'\"")
        return config


__all__ = ["StylistConfig"]
