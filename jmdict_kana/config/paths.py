"""Path constants and discovery for the JMdict kana index builder.

Defines default pipeline folders and application data directories.
"""

import os
import sys
from pathlib import Path


# Application name for config directories
APP_NAME = "jmdict-kana-index"

# Default pipeline folders, relative to the working directory
DEFAULT_DATA_DIR = "data"
DEFAULT_RELEASE_DIR = "release"
DEFAULT_OUTPUT_FILENAME = "simple.min.json"


def get_app_data_dir() -> Path:
    """
    Get the application data directory.

    Returns:
        Path to app data directory (created if not exists)

    Platform-specific locations:
        - Windows: %APPDATA%/jmdict-kana-index
        - Linux: ~/.config/jmdict-kana-index
        - macOS: ~/Library/Application Support/jmdict-kana-index
    """
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

    app_dir = base / APP_NAME
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def get_settings_path() -> Path:
    """Get the path to the settings JSON file."""
    return get_app_data_dir() / "settings.json"


def get_log_file_path() -> Path:
    """
    Get the path to the main log file.

    Returns:
        Path to application log file (parent created if not exists)
    """
    log_dir = get_app_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "build.log"
