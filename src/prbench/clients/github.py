import json
import logging
import time
from dataclasses import dataclass

import httpx

from ..config import GITHUB_API_URL, GITHUB_COMMENT_MAX_CHARS, PUBLISH_TIMEOUT_SECONDS
from .exceptions import (
    GitHubAPIError,
    GitHubAuthError,
    GitHubErrorDetail,
    GitHubNetworkError,
    GitHubNotFoundError,
    GitHubServerError,
    GitHubTimeoutError,
    GitHubValidationError,
)

logger = logging.getLogger(__name__)

_API_VERSION = "2022-11-28"


@dataclass(frozen=True)
class PublishRequest:
    owner: str
    repo: str
    number: int
    body: str


@dataclass(frozen=True)
class PublishedComment:
    id: int
    html_url: str


def _parse_error_response(status_code: int, response_text: str) -> GitHubErrorDetail:
    message = response_text
    documentation_url: str | None = None

    try:
        data = json.loads(response_text)
        if isinstance(data, dict):
            message = data.get("message", response_text)
            documentation_url = data.get("documentation_url")
            errors = data.get("errors")
            if isinstance(errors, list) and errors:
                parts = [
                    e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors
                ]
                message = f"{message}: {'; '.join(parts)}"
    except (json.JSONDecodeError, TypeError):
        pass

    return GitHubErrorDetail(
        message=message,
        status_code=status_code,
        documentation_url=documentation_url,
        raw_response=response_text,
    )


def _raise_for_status(resp: httpx.Response) -> None:
    if resp.is_success:
        return

    detail = _parse_error_response(resp.status_code, resp.text)

    if resp.status_code in (401, 403):
        raise GitHubAuthError(detail)

    if resp.status_code == 404:
        raise GitHubNotFoundError(detail)

    if resp.status_code == 422:
        raise GitHubValidationError(detail)

    raise GitHubServerError(detail)


class GitHubClient:
    """Minimal GitHub REST client: creates pull request comments."""

    def __init__(
        self,
        token: str,
        api_url: str = GITHUB_API_URL,
        timeout: float = PUBLISH_TIMEOUT_SECONDS,
    ) -> None:
        if not token:
            raise RuntimeError("GITHUB_TOKEN is not set. Please export it in your environment.")
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": _API_VERSION,
        }

    def comments_url(self, owner: str, repo: str, number: int) -> str:
        return f"{self._api_url}/repos/{owner}/{repo}/issues/{number}/comments"

    def create_comment(self, request: PublishRequest) -> PublishedComment:
        """Post ``request.body`` as a new comment on the pull request.

        Exactly one request is sent; there is no retry and no lookup of earlier
        comments, so every call adds a new comment.

        Raises:
            GitHubAuthError: Token invalid or lacks permission.
            GitHubNotFoundError: Repository or pull request not found.
            GitHubValidationError: Body rejected (e.g. too long).
            GitHubServerError: Any other non-success status.
            GitHubNetworkError: Transport error or timeout.
        """
        if len(request.body) > GITHUB_COMMENT_MAX_CHARS:
            logger.warning(
                "Comment body is %d characters, GitHub limit is %d; the API will likely reject it",
                len(request.body),
                GITHUB_COMMENT_MAX_CHARS,
            )

        url = self.comments_url(request.owner, request.repo, request.number)
        target = f"{request.owner}/{request.repo}#{request.number}"

        try:
            started_at = time.monotonic()
            with httpx.Client(timeout=self._timeout) as client:
                resp = client.post(url, json={"body": request.body}, headers=self._headers())
            latency_ms = int((time.monotonic() - started_at) * 1000)
        except httpx.TimeoutException as exc:
            logger.error("[%s] GitHub API timeout after %.1fs", target, self._timeout)
            raise GitHubTimeoutError(f"Request timed out after {self._timeout}s") from exc
        except httpx.RequestError as exc:
            logger.error("[%s] GitHub API network error: %s", target, exc)
            raise GitHubNetworkError(f"Network error: {exc}") from exc

        try:
            _raise_for_status(resp)
        except GitHubAPIError as exc:
            logger.error(
                "[%s] GitHub API error (status=%d, latency=%dms): %s",
                target,
                resp.status_code,
                latency_ms,
                exc.detail.message,
            )
            raise

        logger.info(
            "[%s] GitHub API success (status=%d, latency=%dms)",
            target,
            resp.status_code,
            latency_ms,
        )

        try:
            data = resp.json()
        except ValueError as exc:
            raise GitHubServerError(
                GitHubErrorDetail(
                    message="GitHub API returned non-JSON response",
                    status_code=resp.status_code,
                    documentation_url=None,
                    raw_response=resp.text,
                )
            ) from exc

        return PublishedComment(id=int(data.get("id", 0)), html_url=str(data.get("html_url", "")))
