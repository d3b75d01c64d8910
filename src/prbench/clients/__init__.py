from .exceptions import (
    GitHubAPIError,
    GitHubAuthError,
    GitHubNetworkError,
    GitHubNotFoundError,
    GitHubServerError,
    GitHubTimeoutError,
    GitHubValidationError,
)
from .github import GitHubClient, PublishedComment, PublishRequest

__all__ = [
    "GitHubClient",
    "PublishRequest",
    "PublishedComment",
    "GitHubAPIError",
    "GitHubAuthError",
    "GitHubNetworkError",
    "GitHubNotFoundError",
    "GitHubServerError",
    "GitHubTimeoutError",
    "GitHubValidationError",
]
