"""Pipeline exceptions for the JMdict kana index builder.

Custom exception hierarchy for each pipeline stage. Components raise
these; the pipeline orchestrator catches them and reports failure
through return values.
"""

from typing import Optional


class PipelineError(Exception):
    """Base exception for all pipeline stage errors."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class ResolutionError(PipelineError):
    """Release metadata could not be resolved to a downloadable asset."""
    pass


class GitHubError(ResolutionError):
    """GitHub API returned an unexpected response."""
    pass


class GitHubConnectionError(GitHubError):
    """Raised when unable to connect to GitHub."""
    pass


class GitHubRateLimitError(GitHubError):
    """Raised when GitHub rate limit is exceeded."""
    pass


class GitHubNotFoundError(GitHubError):
    """Raised when repository or release is not found."""
    pass


class MalformedResponseError(GitHubError):
    """Release metadata body is not a JSON object."""
    pass


class AssetNotFoundError(ResolutionError):
    """No release asset matches the requested prefix and suffix."""

    def __init__(self, tag: str, prefix: Optional[str], suffix: Optional[str]):
        self.tag = tag
        self.prefix = prefix
        self.suffix = suffix
        message = (
            f"No asset starting with '{prefix or ''}' and ending with "
            f"'{suffix or ''}' for tag '{tag}'"
        )
        super().__init__(message)


class DownloadError(PipelineError):
    """Failed to download a release asset."""

    def __init__(
        self,
        message: str,
        url: str = "",
        status_code: Optional[int] = None,
        original_error: Exception = None
    ):
        self.url = url
        self.status_code = status_code
        super().__init__(message, original_error)


class TooManyRedirectsError(DownloadError):
    """Download kept redirecting past the allowed number of hops."""

    def __init__(self, url: str, max_redirects: int):
        self.max_redirects = max_redirects
        message = f"Too many redirects (more than {max_redirects}) for '{url}'"
        super().__init__(message, url=url)


class ExtractionError(PipelineError):
    """Failed to unpack the downloaded archive."""

    def __init__(self, archive_path: str, reason: str, original_error: Exception = None):
        self.archive_path = archive_path
        message = f"Failed to extract '{archive_path}': {reason}"
        super().__init__(message, original_error)


class ConversionError(PipelineError):
    """Failed to turn the source dictionary into the phonetic index."""
    pass
