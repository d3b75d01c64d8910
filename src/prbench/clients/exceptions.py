from dataclasses import dataclass


@dataclass
class GitHubErrorDetail:
    """Parsed GitHub REST API error."""

    message: str
    status_code: int
    documentation_url: str | None
    raw_response: str


class GitHubAPIError(Exception):
    """GitHub API error base class."""

    def __init__(self, detail: GitHubErrorDetail) -> None:
        self.detail = detail
        super().__init__(f"{detail.message} (status={detail.status_code})")

    @property
    def status_code(self) -> int:
        return self.detail.status_code


class GitHubAuthError(GitHubAPIError):
    """Bad credentials or missing permission (401, 403)."""


class GitHubNotFoundError(GitHubAPIError):
    """Repository or pull request does not exist, or is invisible to the token (404)."""


class GitHubValidationError(GitHubAPIError):
    """Request rejected by validation, e.g. a comment body over the size limit (422)."""


class GitHubServerError(GitHubAPIError):
    """Server side or otherwise unexpected status."""


class GitHubNetworkError(Exception):
    """Transport-level failure before a response was received."""


class GitHubTimeoutError(GitHubNetworkError):
    """Request timed out."""
