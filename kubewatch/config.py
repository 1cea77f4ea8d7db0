"""
Persisted kubewatch configuration.

The configuration file is a JSON document holding per-handler settings. It is
read from ``$KW_CONFIG`` when set, otherwise from ``~/.kubewatch.json``. A
missing file is not an error; defaults are used until ``write()`` creates it.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, PrivateAttr

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "KW_CONFIG"
DEFAULT_CONFIG_FILE = ".kubewatch.json"


def default_config_path() -> Path:
    """Location of the configuration file."""
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / DEFAULT_CONFIG_FILE


class DingTalkConfig(BaseModel):
    """DingTalk handler credentials."""

    token: str = ""
    sign: str = ""


class HandlerConfig(BaseModel):
    """Settings for each notification handler."""

    dingtalk: DingTalkConfig = Field(default_factory=DingTalkConfig)


class Config(BaseModel):
    """Root of the configuration file."""

    handler: HandlerConfig = Field(default_factory=HandlerConfig)

    _path: Optional[Path] = PrivateAttr(default=None)

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "Config":
        """
        Load configuration from disk.

        Args:
            path: Config file path. Defaults to ``default_config_path()``.

        Returns:
            Config instance bound to ``path``

        Raises:
            pydantic.ValidationError: If the file content is not a valid config
        """
        config_path = Path(path) if path else default_config_path()

        if config_path.exists():
            config = cls.model_validate_json(config_path.read_text(encoding="utf-8"))
            logger.debug(f"Loaded configuration from {config_path}")
        else:
            config = cls()
            logger.debug(f"No configuration at {config_path}, using defaults")

        config._path = config_path
        return config

    @property
    def path(self) -> Path:
        """File this configuration is written to."""
        return self._path or default_config_path()

    def write(self) -> Path:
        """
        Persist configuration to its file.

        Returns:
            Path the configuration was written to
        """
        config_path = self.path
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        logger.info(f"Configuration written to {config_path}")
        return config_path
