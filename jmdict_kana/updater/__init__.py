"""Updater module for GitHub integration.

This module handles source dictionary acquisition:
- GitHubClient: GitHub API integration for release asset resolution
- AssetDownloader: Streaming download with bounded redirects
- ArchiveExtractor: Traversal-safe tarball extraction
"""

from .github_client import (
    GitHubClient,
    GitHubRelease,
    ReleaseAsset,
    build_release_url,
)
from .downloader import (
    AssetDownloader,
    ProgressCallback,
    filename_from_url,
)
from .extractor import ArchiveExtractor

__all__ = [
    # GitHub client
    "GitHubClient",
    "GitHubRelease",
    "ReleaseAsset",
    "build_release_url",
    # Downloader
    "AssetDownloader",
    "ProgressCallback",
    "filename_from_url",
    # Extractor
    "ArchiveExtractor",
]
