"""Main entry point for the JMdict kana index builder.

Sets up logging, loads the saved settings and runs the full build.
"""

import sys

from .config.paths import get_log_file_path
from .config.settings import ConfigManager
from .pipeline import DictionaryPipeline
from .utils.logging import setup_logging


def main() -> int:
    """
    Build the kana index with the saved settings.

    Returns:
        Exit code (0 for success)
    """
    logger = setup_logging(log_file=get_log_file_path())
    logger.info("Build starting")

    config_manager = ConfigManager()
    config = config_manager.load()
    logger.info(f"Loaded settings from {config_manager.config_path}")

    if DictionaryPipeline(config).build():
        return 0
    return 1


if __name__ == "__main__":
    sys.exit(main())
