"""GitHub API implementation of the comment API."""

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from ..config import settings
from .public_api import (
    Comment,
    CommentApi,
    MalformedResponse,
    NotFound,
    PullRequestSummary,
    TransportError,
    UnexpectedStatus,
)

logger = logging.getLogger("pr_commentator.github")

REF_PREFIX = "refs/heads/"
MASK = "************"

_pull_requests = TypeAdapter(list[PullRequestSummary])
_comments = TypeAdapter(list[Comment])


def mask_token(token: str) -> str:
    """Hide a token, keeping two characters on each side of long ones."""
    if len(token) > 8:
        return f"{token[:2]}{MASK}{token[-2:]}"
    return MASK


def branch_from_ref(ref_name: str) -> str:
    """Turn ``refs/heads/foo`` into ``foo``; plain branch names pass through."""
    if ref_name.startswith(REF_PREFIX):
        return ref_name[len(REF_PREFIX):]
    return ref_name


class GitHubClient(CommentApi):
    """
    GitHub REST implementation of the comment API.

    Pull request conversation comments are issue comments, so listing,
    creating and editing go through the issues endpoints.
    """

    ACCEPT = "application/vnd.github.v3+json"

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url or settings.api_url
        self._token = token or settings.token
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "Accept": self.ACCEPT,
                "Authorization": f"token {self._token}",
            },
            timeout=timeout if timeout is not None else settings.timeout_seconds,
            transport=transport,
            follow_redirects=True,
        )

    def __repr__(self) -> str:
        return f"GitHubClient(base_url='{self._base_url}', token='{mask_token(self._token)}')"

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        url: str,
        expected_status: int,
        **kwargs,
    ) -> httpx.Response:
        """Send one request and check its status code."""
        full_url = self._client.base_url.join(url.lstrip("/"))
        logger.debug(f"{method} {full_url}")
        try:
            response = await self._client.request(method, url.lstrip("/"), **kwargs)
        except httpx.RequestError as e:
            logger.warning(f"Request to GitHub failed: {e!r}")
            raise TransportError(method, str(full_url), e) from e

        if response.status_code != expected_status:
            raise UnexpectedStatus(method, str(response.url), response.status_code, response.text)
        return response

    @staticmethod
    def _parse(adapter: TypeAdapter, response: httpx.Response):
        """Validate a JSON response against a pydantic type."""
        try:
            return adapter.validate_json(response.content)
        except ValidationError as e:
            raise MalformedResponse(f"Unexpected payload from {response.url}: {e}") from e

    async def resolve_pr_for_ref(self, owner: str, repo: str, ref_name: str) -> int:
        """Return the most recently updated open PR whose head is ``ref_name``."""
        branch = branch_from_ref(ref_name)
        response = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/pulls",
            200,
            params={"state": "open", "sort": "updated", "direction": "desc"},
        )
        pulls: list[PullRequestSummary] = self._parse(_pull_requests, response)

        # The listing is sorted by recency, so the first match is the freshest
        for pr in pulls:
            if pr.head_ref == branch:
                return pr.number
        raise NotFound(f"{owner}/{repo}", branch)

    async def list_comments(self, owner: str, repo: str, pr_number: int) -> list[Comment]:
        """List the comments of a pull request (first page only)."""
        response = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/issues/{pr_number}/comments",
            200,
        )
        return self._parse(_comments, response)

    async def create_comment(self, owner: str, repo: str, pr_number: int, body: str) -> None:
        """Add a comment to a pull request."""
        await self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{pr_number}/comments",
            201,
            json={"body": body},
        )

    async def edit_comment(self, owner: str, repo: str, comment_id: int, body: str) -> None:
        """Replace the body of an existing comment."""
        await self._request(
            "PATCH",
            f"/repos/{owner}/{repo}/issues/comments/{comment_id}",
            200,
            json={"body": body},
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
