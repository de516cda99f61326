"""Asset downloader for dictionary releases.

Streams a release asset to disk, following redirects up to a fixed
number of hops.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union
from urllib.parse import unquote, urljoin, urlparse

import requests

from jmdict_kana.exceptions import DownloadError, TooManyRedirectsError
from jmdict_kana.updater.github_client import DEFAULT_USER_AGENT, REQUEST_TIMEOUT

logger = logging.getLogger("jmdict_kana.downloader")


MAX_REDIRECTS = 5
CHUNK_SIZE = 64 * 1024

# Progress callback type: (bytes_downloaded, total_bytes)
ProgressCallback = Callable[[int, int], None]


def filename_from_url(url: str) -> str:
    """Get the final path segment of a URL, percent-decoded."""
    return unquote(Path(urlparse(url).path).name)


class AssetDownloader:
    """Downloads release assets into a local directory."""

    def __init__(
        self,
        timeout: float = REQUEST_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        max_redirects: int = MAX_REDIRECTS,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the downloader.

        Args:
            timeout: Socket timeout in seconds for each request
            user_agent: User-Agent header sent with every request
            max_redirects: Maximum number of redirects to follow
            session: Optional session to reuse
        """
        self._timeout = timeout
        self._max_redirects = max_redirects
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": user_agent})

    def download(
        self,
        url: str,
        dest_dir: Union[str, Path],
        filename: Optional[str] = None,
        callback: Optional[ProgressCallback] = None
    ) -> Path:
        """
        Download a file, following redirects manually.

        Args:
            url: File URL to download
            dest_dir: Existing directory to save the file into
            filename: Target filename (default: last segment of the final URL)
            callback: Optional progress callback(bytes_downloaded, total_bytes)

        Returns:
            Path of the downloaded file

        Raises:
            TooManyRedirectsError: If the redirect bound is exceeded
            DownloadError: For missing directory, bad status or stream errors
        """
        if not url:
            raise DownloadError("No download URL provided")

        dest_dir = Path(dest_dir)
        if not dest_dir.is_dir():
            raise DownloadError(f"Download directory '{dest_dir}' does not exist", url=url)

        current_url = url
        for redirects in range(self._max_redirects + 1):
            try:
                response = self._session.get(
                    current_url,
                    stream=True,
                    allow_redirects=False,
                    timeout=self._timeout
                )
            except requests.exceptions.RequestException as e:
                logger.error(f"Error during download: {e}")
                raise DownloadError("Download request failed", url=current_url, original_error=e)

            with response:
                status = response.status_code
                if 200 <= status < 300:
                    name = filename or filename_from_url(current_url)
                    if not name:
                        raise DownloadError(
                            "Cannot derive a filename from the download URL",
                            url=current_url,
                            status_code=status
                        )
                    target = dest_dir / name
                    self._write_stream(response, target, current_url, callback)
                    logger.info(
                        f"Downloaded '{target.name}' (via {redirects} redirects) to '{target}'"
                    )
                    return target

                location = response.headers.get("Location")
                if 300 <= status < 400 and location:
                    logger.debug(f"Redirect {redirects + 1}: {status} -> {location}")
                    current_url = urljoin(current_url, location)
                    continue

                raise DownloadError(
                    f"Download failed with status code: {status}",
                    url=current_url,
                    status_code=status
                )

        raise TooManyRedirectsError(url, self._max_redirects)

    def _write_stream(
        self,
        response: requests.Response,
        target: Path,
        url: str,
        callback: Optional[ProgressCallback]
    ) -> None:
        """Stream a response body to a file, removing it if anything fails."""
        try:
            total_size = int(response.headers.get("content-length") or 0)
        except ValueError:
            # Only used for progress reporting
            total_size = 0
        downloaded = 0
        try:
            with open(target, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        downloaded += len(chunk)
                        if callback:
                            callback(downloaded, total_size)
        except (OSError, requests.exceptions.RequestException) as e:
            logger.error(f"Error writing file: {e}")
            target.unlink(missing_ok=True)
            raise DownloadError(f"Failed to write '{target}'", url=url, original_error=e)

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()

    def __enter__(self) -> "AssetDownloader":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
