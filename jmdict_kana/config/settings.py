"""Pipeline settings management for the JMdict kana index builder.

Provides PipelineConfig dataclass and ConfigManager for persistence.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from jmdict_kana.config.paths import (
    DEFAULT_DATA_DIR,
    DEFAULT_OUTPUT_FILENAME,
    DEFAULT_RELEASE_DIR,
    get_settings_path,
)
from jmdict_kana.updater.downloader import MAX_REDIRECTS
from jmdict_kana.updater.github_client import (
    DEFAULT_USER_AGENT,
    GITHUB_API_BASE,
    LATEST_TAG,
    REQUEST_TIMEOUT,
)

logger = logging.getLogger("jmdict_kana.settings")

TOKEN_ENV_VAR = "GITHUB_TOKEN"


@dataclass
class PipelineConfig:
    """Settings passed into the pipeline entry points."""

    # Release source
    owner: str = "scriptin"
    repo: str = "jmdict-simplified"
    asset_prefix: str = "jmdict-all-"
    asset_suffix: str = "json.tgz"
    default_tag: str = LATEST_TAG

    # Folders and outputs
    data_dir: str = DEFAULT_DATA_DIR
    release_dir: str = DEFAULT_RELEASE_DIR
    output_filename: str = DEFAULT_OUTPUT_FILENAME
    create_gzip: bool = True

    # HTTP
    api_base_url: str = GITHUB_API_BASE
    user_agent: str = DEFAULT_USER_AGENT
    timeout: int = REQUEST_TIMEOUT
    max_redirects: int = MAX_REDIRECTS
    github_token: str = ""

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)

    @property
    def release_path(self) -> Path:
        return Path(self.release_dir)

    @property
    def output_path(self) -> Path:
        return self.release_path / self.output_filename

    def to_dict(self) -> dict:
        """Convert settings to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PipelineConfig":
        """Create settings from dictionary, ignoring unknown keys."""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)


class ConfigManager:
    """Manages pipeline settings persistence."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            config_path: Optional custom path, defaults to platform standard
        """
        self._config_path = config_path or get_settings_path()

    @property
    def config_path(self) -> Path:
        """Path to settings file."""
        return self._config_path

    def load(self) -> PipelineConfig:
        """
        Load settings from disk.

        The GITHUB_TOKEN environment variable fills in the token when the
        settings file does not carry one.

        Returns:
            PipelineConfig instance (defaults if file not found or invalid)
        """
        config = PipelineConfig()
        if self._config_path.exists():
            try:
                with open(self._config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    config = PipelineConfig.from_dict(data)
                else:
                    logger.warning(f"Ignoring settings file '{self._config_path}': not an object")
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Ignoring unreadable settings file '{self._config_path}': {e}")

        if not config.github_token:
            config.github_token = os.environ.get(TOKEN_ENV_VAR, "")
        return config

    def save(self, config: PipelineConfig) -> None:
        """
        Persist settings to disk. The API token is never written.

        Args:
            config: Settings to save
        """
        data = config.to_dict()
        data.pop("github_token", None)

        # Ensure parent directory exists
        self._config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self._config_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
