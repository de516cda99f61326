"""GitHub API client for dictionary releases.

Fetches release metadata and picks the asset to download.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from urllib.parse import quote

import requests

from jmdict_kana import __version__
from jmdict_kana.exceptions import (
    AssetNotFoundError,
    GitHubConnectionError,
    GitHubError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    MalformedResponseError,
)

logger = logging.getLogger("jmdict_kana.github_client")


# GitHub API constants
GITHUB_API_BASE = "https://api.github.com"
LATEST_TAG = "latest"
DEFAULT_USER_AGENT = f"jmdict-kana-index/{__version__}"

# Request timeout in seconds
REQUEST_TIMEOUT = 30


@dataclass(frozen=True)
class ReleaseAsset:
    """Represents a downloadable asset from a GitHub release."""
    name: str
    download_url: str
    size: int = 0
    content_type: str = ""

    def matches(self, prefix: Optional[str] = None, suffix: Optional[str] = None) -> bool:
        """Check the asset name against an optional prefix and suffix."""
        if prefix and not self.name.startswith(prefix):
            return False
        if suffix and not self.name.endswith(suffix):
            return False
        return True

    @classmethod
    def from_api_response(cls, data: dict) -> "ReleaseAsset":
        """
        Create ReleaseAsset from GitHub API response.

        Raises:
            MalformedResponseError: If the name or download URL is not a string
        """
        name = data.get("name") or ""
        download_url = data.get("browser_download_url") or ""
        if not isinstance(name, str) or not isinstance(download_url, str):
            raise MalformedResponseError("Release asset has a non-string name or download URL")

        return cls(
            name=name,
            download_url=download_url,
            size=data.get("size") or 0,
            content_type=data.get("content_type") or "",
        )


@dataclass
class GitHubRelease:
    """Represents a GitHub release with its assets."""
    tag_name: str
    name: str
    published_at: Optional[datetime]
    assets: List[ReleaseAsset] = field(default_factory=list)

    def find_asset(
        self,
        prefix: Optional[str] = None,
        suffix: Optional[str] = None
    ) -> Optional[ReleaseAsset]:
        """Get the first asset, in listed order, matching prefix and suffix."""
        for asset in self.assets:
            if asset.matches(prefix, suffix):
                return asset
        return None

    @classmethod
    def from_api_response(cls, data: dict) -> "GitHubRelease":
        """
        Create GitHubRelease from GitHub API response.

        Raises:
            MalformedResponseError: If assets is not a list or an asset is malformed
        """
        # Parse published_at date
        published_at = None
        if data.get("published_at"):
            try:
                published_at = datetime.fromisoformat(
                    data["published_at"].replace("Z", "+00:00")
                )
            except (ValueError, TypeError, AttributeError):
                pass

        raw_assets = data.get("assets") or []
        if not isinstance(raw_assets, list):
            raise MalformedResponseError(
                f"Release assets is a {type(raw_assets).__name__}, expected a list"
            )
        assets = [
            ReleaseAsset.from_api_response(a)
            for a in raw_assets
            if isinstance(a, dict)
        ]

        return cls(
            tag_name=data.get("tag_name") or "",
            name=data.get("name") or "",
            published_at=published_at,
            assets=assets,
        )


def build_release_url(
    owner: str,
    repo: str,
    tag: Optional[str] = LATEST_TAG,
    api_base: str = GITHUB_API_BASE
) -> str:
    """
    Build the release metadata URL for a tag.

    Args:
        owner: Repository owner (user or organization)
        repo: Repository name
        tag: Release tag, or "latest" for the most recent release
        api_base: API root URL

    Returns:
        Full release metadata URL with the tag percent-encoded
    """
    base = f"{api_base.rstrip('/')}/repos/{owner}/{repo}/releases"
    if not tag or tag == LATEST_TAG:
        return f"{base}/latest"
    return f"{base}/tags/{quote(tag, safe='')}"


class GitHubClient:
    """Client for resolving release assets through the GitHub API."""

    def __init__(
        self,
        timeout: float = REQUEST_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        token: Optional[str] = None,
        api_base: str = GITHUB_API_BASE
    ):
        """
        Initialize GitHub client.

        Args:
            timeout: Request timeout in seconds
            user_agent: Identifying User-Agent, required by the GitHub API
            token: Optional API token for higher rate limits
            api_base: API root URL
        """
        self._timeout = timeout
        self._api_base = api_base
        self._session = requests.Session()
        self._session.headers.update({
            "Accept": "application/vnd.github+json",
            "User-Agent": user_agent,
        })
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def _make_request(self, url: str) -> dict:
        """
        Make a GET request to GitHub API.

        Args:
            url: Full URL to request

        Returns:
            JSON response as dict

        Raises:
            GitHubConnectionError: If unable to connect
            GitHubRateLimitError: If rate limit exceeded
            GitHubNotFoundError: If resource not found
            MalformedResponseError: If the body is not a JSON object
            GitHubError: For other errors
        """
        try:
            logger.debug(f"Making request to: {url}")
            response = self._session.get(url, timeout=self._timeout)
        except requests.exceptions.Timeout as e:
            logger.error("GitHub request timed out")
            raise GitHubConnectionError("Request timed out connecting to GitHub", e)
        except requests.exceptions.ConnectionError as e:
            logger.error(f"GitHub connection error: {e}")
            raise GitHubConnectionError(
                "Unable to connect to GitHub. Check your internet connection.", e
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"GitHub request error: {e}")
            raise GitHubError("Request failed", e)

        if 200 <= response.status_code < 300:
            try:
                data = response.json()
            except ValueError as e:
                raise MalformedResponseError("Release metadata is not valid JSON", e)
            if not isinstance(data, dict):
                raise MalformedResponseError(
                    f"Release metadata is a {type(data).__name__}, expected an object"
                )
            return data
        elif response.status_code == 404:
            raise GitHubNotFoundError(f"Resource not found: {url}")
        elif response.status_code == 403:
            # Check for rate limiting
            if "rate limit" in response.text.lower():
                raise GitHubRateLimitError("GitHub API rate limit exceeded")
            raise GitHubError(f"Access denied: {response.text}")
        else:
            raise GitHubError(
                f"GitHub API error {response.status_code}: {response.text}"
            )

    def get_release(self, owner: str, repo: str, tag: Optional[str] = LATEST_TAG) -> GitHubRelease:
        """
        Get a release by tag, or the latest release.

        Args:
            owner: Repository owner
            repo: Repository name
            tag: Release tag (e.g., "3.6.1+20250101"), or "latest"

        Returns:
            GitHubRelease for the requested tag

        Raises:
            GitHubNotFoundError: If release not found
            GitHubError: For other errors
        """
        url = build_release_url(owner, repo, tag, self._api_base)
        logger.info(f"Fetching release '{tag or LATEST_TAG}' of {owner}/{repo}")

        data = self._make_request(url)
        release = GitHubRelease.from_api_response(data)

        logger.info(f"Found release: {release.tag_name or tag} ({len(release.assets)} assets)")
        return release

    def resolve_asset(
        self,
        owner: str,
        repo: str,
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
        tag: Optional[str] = LATEST_TAG
    ) -> ReleaseAsset:
        """
        Resolve the first release asset matching a filename prefix and suffix.

        Args:
            owner: Repository owner
            repo: Repository name
            prefix: Required filename prefix (case-sensitive), or None
            suffix: Required filename suffix (case-sensitive), or None
            tag: Release tag, or "latest"

        Returns:
            The first matching ReleaseAsset in listed order

        Raises:
            AssetNotFoundError: If the release has no matching asset
            GitHubError: If the release metadata cannot be fetched
        """
        release = self.get_release(owner, repo, tag)
        if not release.assets:
            logger.warning(f"No assets found for release '{tag}' of {owner}/{repo}")
            raise AssetNotFoundError(tag or LATEST_TAG, prefix, suffix)

        asset = release.find_asset(prefix, suffix)
        if asset is None:
            raise AssetNotFoundError(tag or LATEST_TAG, prefix, suffix)

        logger.info(f"Selected asset: {asset.name}")
        return asset

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()

    def __enter__(self) -> "GitHubClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
