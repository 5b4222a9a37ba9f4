"""
Application configuration for the CNC line annotator.
Simple JSON-backed settings with sensible defaults.
"""
import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import List, Optional

from dialects.tsugami_dialect import TSUGAMI_MODELS
from utils.errors import SettingsException

logger = logging.getLogger(__name__)

SETTINGS_DIR_ENV = "CNC_ANNOTATOR_HOME"
SETTINGS_DIRNAME = ".cnc_annotator"
SETTINGS_FILENAME = "settings.json"


@dataclass
class AppConfig:
    """User settings for the annotator."""
    default_model: str = TSUGAMI_MODELS[0]

    # Dictionary document merged in at start-up, if any
    dictionary_path: Optional[str] = None
    last_export_dir: Optional[str] = None

    log_level: str = "INFO"

    # Window geometry: x, y, width, height
    window_geometry: List[int] = field(default_factory=lambda: [100, 100, 1400, 900])


def get_settings_dir() -> Path:
    """Resolve the settings directory, honoring the environment override."""
    override = os.environ.get(SETTINGS_DIR_ENV)
    if override:
        return Path(override)
    return Path.home() / SETTINGS_DIRNAME


def get_settings_path() -> Path:
    return get_settings_dir() / SETTINGS_FILENAME


class ConfigManager:
    """Loads and saves application settings."""

    @staticmethod
    def default_config() -> AppConfig:
        return AppConfig()

    @staticmethod
    def save_config(config: AppConfig, filepath: Optional[str] = None):
        """Save configuration to a JSON file."""
        path = Path(filepath) if filepath else get_settings_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(asdict(config), f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise SettingsException(f"Could not save settings to {path}: {e}") from e

    @staticmethod
    def load_config(filepath: Optional[str] = None) -> AppConfig:
        """Load configuration from a JSON file, falling back to defaults."""
        path = Path(filepath) if filepath else get_settings_path()
        if not path.exists():
            return ConfigManager.default_config()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)

            # Ignore keys written by other versions
            known = {f.name for f in fields(AppConfig)}
            config = AppConfig(**{key: value for key, value in data.items() if key in known})

        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not load settings from %s, using defaults: %s", path, e)
            return ConfigManager.default_config()

        if not ConfigManager.valid_geometry(config.window_geometry):
            logger.warning("Ignoring invalid window geometry %r", config.window_geometry)
            config.window_geometry = AppConfig().window_geometry
        return config

    @staticmethod
    def valid_geometry(geometry) -> bool:
        """Geometry must be four integers: x, y, width, height."""
        return (isinstance(geometry, list) and len(geometry) == 4
                and all(isinstance(v, int) and not isinstance(v, bool) for v in geometry))

    @staticmethod
    def validate_model(config: AppConfig, models: List[str]) -> str:
        """Return the configured default model if known, else the first available one."""
        if config.default_model in models:
            return config.default_model
        return models[0] if models else config.default_model
