"""Singleton holding the SDK settings.

Settings come from sdk.{APP_ENV}.yaml (or sdk.yaml) or are set
programmatically. Either way they are validated into SdkConfig, while
get() keeps serving the raw keys, most importantly ``kmsArn``.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .types import SdkConfig

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of ConfigStore.load(); error is set instead of raising."""
    app_env: str
    config_file: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ConfigStore:
    """
    Singleton store for the SDK settings.
    """
    _instance: Optional["ConfigStore"] = None

    def __new__(cls) -> "ConfigStore":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.reset()
        return cls._instance

    @staticmethod
    def _config_path(config_dir: Path, app_env: str) -> Path:
        for name in (f"sdk.{app_env}.yaml", "sdk.yaml"):
            candidate = config_dir / name
            if candidate.exists():
                return candidate
        raise FileNotFoundError(f"No sdk.{app_env}.yaml or sdk.yaml in {config_dir}")

    def load(self, config_dir: str, app_env: Optional[str] = None) -> LoadResult:
        """
        Load and validate the settings file for an environment.

        On any failure the previous settings are kept and the reason is
        reported in the result.

        Args:
            config_dir: Directory holding the settings files
            app_env: Environment name (default: APP_ENV env var or 'dev')

        Returns:
            LoadResult naming the file used or the error met
        """
        result = LoadResult(app_env=app_env or os.environ.get("APP_ENV", "dev"))

        try:
            path = self._config_path(Path(config_dir), result.app_env)
            result.config_file = str(path)
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            sdk_config = SdkConfig.model_validate(raw)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as e:
            result.error = f"{type(e).__name__}: {e}"
            logger.error(f"ConfigStore.load: Settings not loaded: {result.error}")
            return result

        self._data = raw
        self._config = sdk_config
        logger.info(f"ConfigStore.load: Loaded settings from {path}")
        return result

    def get(self, key: str, default: Any = None) -> Any:
        """Raw top-level setting, e.g. 'kmsArn'."""
        return self._data.get(key, default)

    def get_config(self) -> Optional[SdkConfig]:
        """Validated settings, or None before anything was loaded or set."""
        return self._config

    def set(self, key: str, value: Any) -> None:
        """
        Set a top-level setting programmatically.

        Raises:
            pydantic.ValidationError: If the result is not a valid SdkConfig
        """
        data: Dict[str, Any] = {**self._data, key: value}
        self._config = SdkConfig.model_validate(data)
        self._data = data
        logger.debug(f"ConfigStore.set: Set '{key}'")

    def reset(self) -> None:
        self._data: Dict[str, Any] = {}
        self._config: Optional[SdkConfig] = None


config = ConfigStore()
