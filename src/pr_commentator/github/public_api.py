"""Public API for the GitHub module.

This module defines the models, errors and the abstract comment API.
Implementation modules import from here, not the other way around.
"""

from abc import ABC, abstractmethod

from pydantic import AliasPath, BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Models
# =============================================================================

class RepoCoordinates(BaseModel):
    """Owner and name of the target repository."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"


class PullRequestSummary(BaseModel):
    """The subset of a pull request returned by the listing endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    number: int = Field(ge=0)
    head_ref: str = Field(validation_alias=AliasPath("head", "ref"))


class Comment(BaseModel):
    """A comment on a pull request conversation."""

    id: int = Field(ge=0)
    body: str = ""

    @field_validator("body", mode="before")
    @classmethod
    def _null_body(cls, value):
        return "" if value is None else value


# =============================================================================
# Errors
# =============================================================================

class ApiError(Exception):
    """Base class for every failure talking to the hosting service."""


class TransportError(ApiError):
    """No usable response (connection, timeout, redirect loop, undecodable body...)."""

    def __init__(self, method: str, url: str, cause: Exception):
        self.method = method
        self.url = url
        self.cause = cause
        super().__init__(f"{method} {url} failed: {cause!r}")


class UnexpectedStatus(ApiError):
    """The service answered with a status outside the expected set."""

    MAX_BODY_LENGTH = 500

    def __init__(self, method: str, url: str, status_code: int, body: str):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body[: self.MAX_BODY_LENGTH]
        super().__init__(
            f"{method} {url} returned unexpected status {status_code}: {self.body}"
        )


class MalformedResponse(ApiError):
    """The response payload did not have the expected shape."""


class NotFound(ApiError):
    """No open pull request has the requested head branch."""

    def __init__(self, repo: str, branch: str):
        self.repo = repo
        self.branch = branch
        super().__init__(f"No open pull request found in {repo} for branch '{branch}'")


# =============================================================================
# Service Interface (ABC)
# =============================================================================

class CommentApi(ABC):
    """Abstract interface to the pull request comment endpoints."""

    @abstractmethod
    async def resolve_pr_for_ref(self, owner: str, repo: str, ref_name: str) -> int:
        """
        Find the open pull request whose head branch is ``ref_name``.

        Args:
            owner: Repository owner or organization.
            repo: Repository name.
            ref_name: Branch name, optionally prefixed with ``refs/heads/``.

        Returns:
            The pull request number.

        Raises:
            NotFound: No open pull request has this head branch.
        """
        pass

    @abstractmethod
    async def list_comments(self, owner: str, repo: str, pr_number: int) -> list[Comment]:
        """
        List the conversation comments of a pull request, in creation order.

        Args:
            owner: Repository owner or organization.
            repo: Repository name.
            pr_number: Pull request number.
        """
        pass

    @abstractmethod
    async def create_comment(self, owner: str, repo: str, pr_number: int, body: str) -> None:
        """
        Post a new comment on a pull request.

        Args:
            owner: Repository owner or organization.
            repo: Repository name.
            pr_number: Pull request number.
            body: Comment body.
        """
        pass

    @abstractmethod
    async def edit_comment(self, owner: str, repo: str, comment_id: int, body: str) -> None:
        """
        Replace the body of an existing comment.

        Args:
            owner: Repository owner or organization.
            repo: Repository name.
            comment_id: Id of the comment to replace.
            body: New comment body.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
