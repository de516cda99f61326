"""Build pipeline for the JMdict kana index.

Wires up the release resolver, downloader, extractor and indexer, and
runs them in order. Each operation reports failure through its return
value; stage errors are logged and never escape.
"""

import logging
from pathlib import Path
from typing import List, Optional

from jmdict_kana.config.settings import ConfigManager, PipelineConfig
from jmdict_kana.converter.indexer import DictionaryIndexer
from jmdict_kana.exceptions import PipelineError
from jmdict_kana.updater.downloader import AssetDownloader
from jmdict_kana.updater.extractor import ArchiveExtractor
from jmdict_kana.updater.github_client import GitHubClient

logger = logging.getLogger("jmdict_kana.pipeline")


def first_file_entry(data_dir: Path, entries: List[str]) -> Optional[str]:
    """Return the first extracted entry that is a regular file."""
    for entry in entries:
        if (data_dir / entry).is_file():
            return entry
    return None


class DictionaryPipeline:
    """
    Runs the update and convert stages for a given configuration.

    Holds no state between runs; clients are created per operation.
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self._config = config or PipelineConfig()

    @property
    def config(self) -> PipelineConfig:
        return self._config

    def _github_client(self) -> GitHubClient:
        return GitHubClient(
            timeout=self._config.timeout,
            user_agent=self._config.user_agent,
            token=self._config.github_token or None,
            api_base=self._config.api_base_url,
        )

    def _downloader(self) -> AssetDownloader:
        return AssetDownloader(
            timeout=self._config.timeout,
            user_agent=self._config.user_agent,
            max_redirects=self._config.max_redirects,
        )

    def update(self, tag: Optional[str] = None) -> Optional[str]:
        """
        Download and unpack the source dictionary for a release tag.

        Args:
            tag: Release tag, defaults to the configured tag ("latest")

        Returns:
            Name of the extracted source JSON file relative to the data
            folder, or None on failure
        """
        config = self._config
        tag = tag or config.default_tag
        data_dir = config.data_path
        logger.info(f"Updating source dictionary to release tag '{tag}'")

        try:
            with self._github_client() as client:
                asset = client.resolve_asset(
                    config.owner,
                    config.repo,
                    config.asset_prefix,
                    config.asset_suffix,
                    tag,
                )
        except PipelineError as e:
            logger.error(f"Could not resolve release asset: {e}")
            return None

        try:
            data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Could not create data folder '{data_dir}': {e}")
            return None

        try:
            with self._downloader() as downloader:
                archive_path = downloader.download(asset.download_url, data_dir, asset.name)
        except PipelineError as e:
            logger.error(f"Could not download '{asset.name}': {e}")
            return None

        try:
            entries = ArchiveExtractor().extract(archive_path, data_dir)
        except PipelineError as e:
            logger.error(f"Could not unpack '{asset.name}': {e}")
            return None

        try:
            archive_path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Could not remove archive '{archive_path}': {e}")
            return None

        source = first_file_entry(data_dir, entries)
        if source is None:
            logger.error(f"Archive '{asset.name}' did not contain any files")
            return None

        logger.info(f"Source dictionary updated: '{source}'")
        return source

    def convert(self, filename: Optional[str]) -> bool:
        """
        Convert an extracted source dictionary into the release files.

        Args:
            filename: Source JSON filename inside the data folder

        Returns:
            True if the conversion was successful
        """
        if not filename:
            logger.error("Please provide a valid filename to convert")
            return False

        config = self._config
        source_path = config.data_path / filename
        try:
            config.release_path.mkdir(parents=True, exist_ok=True)
            DictionaryIndexer().index(source_path, config.output_path, config.create_gzip)
        except PipelineError as e:
            logger.error(f"Could not convert '{filename}': {e}")
            return False
        except OSError as e:
            logger.error(f"Could not create release folder '{config.release_path}': {e}")
            return False
        return True

    def build(self, tag: Optional[str] = None) -> bool:
        """
        Update the source dictionary and build the release files.

        Args:
            tag: Release tag, defaults to the configured tag ("latest")

        Returns:
            True if every stage succeeded
        """
        filename = self.update(tag)
        success = filename is not None and self.convert(filename)
        logger.info(f"The build {'was successful' if success else 'failed'}")
        return success


def _pipeline(config: Optional[PipelineConfig]) -> DictionaryPipeline:
    """Create a pipeline, loading the saved settings when no config is given."""
    if config is None:
        config = ConfigManager().load()
    return DictionaryPipeline(config)


def build(tag: Optional[str] = None, config: Optional[PipelineConfig] = None) -> bool:
    """Run the full pipeline."""
    return _pipeline(config).build(tag)


def update(tag: Optional[str] = None, config: Optional[PipelineConfig] = None) -> Optional[str]:
    """Download and unpack the source dictionary only."""
    return _pipeline(config).update(tag)


def convert(filename: str, config: Optional[PipelineConfig] = None) -> bool:
    """Convert an already downloaded source dictionary only."""
    return _pipeline(config).convert(filename)
