"""
Framework Configuration

Loads the key-value configuration used by the browser lifecycle, reporting
and retry handling. Values come from a YAML file, overridden by
``POMWRIGHT_*`` environment variables (``.env`` files included) and finally
by explicit overrides such as pytest command-line options.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'POMWRIGHT_CONFIG'
ENV_PREFIX = 'POMWRIGHT_'
DEFAULT_CONFIG_FILE = 'config.yml'

TRUE_VALUES = {'true', 'yes', '1', 'on'}

DEFAULTS: Dict[str, str] = {
    'browser': 'chrome',
    'headless': 'true',
    'maximize.window': 'false',
    'retry.count': '1',
    'report.dir': 'reports',
    'base.url': 'https://www.saucedemo.com',
    'name': 'QA',
}


def flatten(data: Mapping[str, Any], prefix: str = '') -> Dict[str, str]:
    """Flatten nested mappings into dotted keys with string values."""
    flat: Dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten(value, full_key))
        elif value is None:
            continue
        elif isinstance(value, bool):
            flat[full_key] = 'true' if value else 'false'
        else:
            flat[full_key] = str(value)
    return flat


def env_key(key: str) -> str:
    """``maximize.window`` -> ``POMWRIGHT_MAXIMIZE_WINDOW``."""
    return ENV_PREFIX + key.replace('.', '_').replace('-', '_').upper()


class ConfigManager:
    """String-keyed configuration with typed getters."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None, source: Optional[Path] = None):
        self._values: Dict[str, str] = dict(DEFAULTS)
        if values:
            self._values.update(flatten(values))
        self.source = source
        self._report_dir: Optional[str] = None

    @classmethod
    def load(cls, path: Optional[str] = None, env: Optional[Mapping[str, str]] = None,
             overrides: Optional[Mapping[str, Any]] = None) -> 'ConfigManager':
        """
        Load configuration from YAML, environment and overrides.

        Args:
            path: YAML file; defaults to ``$POMWRIGHT_CONFIG`` or ``config.yml``
            env: Environment mapping; defaults to ``os.environ`` after loading ``.env``
            overrides: Highest-priority values

        Returns:
            Loaded ConfigManager
        """
        if env is None:
            load_dotenv()
            env = os.environ

        config_path = Path(path or env.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILE)
        file_values = cls._read_yaml(config_path)

        config = cls(file_values, source=config_path)
        for key in list(config._values):
            value = env.get(env_key(key))
            if value is not None:
                config._values[key] = value
        if overrides:
            config._values.update(flatten({k: v for k, v in overrides.items() if v is not None}))
        return config

    @staticmethod
    def _read_yaml(config_path: Path) -> Dict[str, Any]:
        try:
            with open(config_path, 'r', encoding='utf-8') as file:
                data = yaml.safe_load(file) or {}
            logger.info(f"Loaded configuration from {config_path}")
        except FileNotFoundError:
            logger.warning(f"No {config_path} found, using defaults")
            return {}
        except yaml.YAMLError as e:
            logger.error(f"Error parsing {config_path}: {e}")
            raise

        if not isinstance(data, Mapping):
            raise ValueError(f"{config_path} must contain a mapping, got {type(data).__name__}")
        return dict(data)

    # --- Getters ---

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._values.get(key)
        if value is None:
            return default
        return value.strip().lower() in TRUE_VALUES

    def get_int(self, key: str, default: int = 0) -> int:
        value = self._values.get(key)
        if value is None or value.strip() == '':
            return default
        try:
            return int(value.strip())
        except ValueError:
            raise ValueError(f"Config key '{key}' must be an integer, got {value!r}") from None

    @property
    def report_dir(self) -> str:
        """Timestamped report directory for this run, computed once."""
        if self._report_dir is None:
            base_dir = self.get('report.dir', DEFAULTS['report.dir'])
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self._report_dir = f"{base_dir}/run_{timestamp}"
        return self._report_dir

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __repr__(self) -> str:
        return f"ConfigManager(source={self.source!s}, browser={self.get('browser')!r})"
