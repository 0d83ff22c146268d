"""Public API for the commentator module.

Run configuration, overwrite policy and run result models.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ..github.github_client import mask_token
from ..github.public_api import RepoCoordinates
from .comment_source import CommentSource


class OverwriteMode(str, Enum):
    """Behaviour when a previous generated comment exists on the PR."""

    NEVER = "Never"  # Always post a new comment
    ALWAYS = "Always"  # Replace the latest generated comment
    USING_IDENTIFIER = "UsingIdentifier"  # Replace only a comment with the same identifier


class OverwritePolicy(BaseModel):
    """The overwrite mode together with the identifier it compares against."""

    model_config = ConfigDict(frozen=True)

    mode: OverwriteMode = OverwriteMode.ALWAYS
    identifier: str | None = None

    @classmethod
    def from_options(
        cls, mode: OverwriteMode | None = None, identifier: str | None = None
    ) -> "OverwritePolicy":
        """Build a policy; giving an identifier implies ``UsingIdentifier``."""
        if identifier is not None:
            mode = OverwriteMode.USING_IDENTIFIER
        return cls(mode=mode or OverwriteMode.ALWAYS, identifier=identifier)


class RunConfig(BaseModel):
    """Everything a single run needs. Built once at startup."""

    model_config = ConfigDict(frozen=True)

    repo: RepoCoordinates
    api_url: str
    token: str = Field(repr=False)
    ref_name: str
    comment_source: CommentSource
    overwrite: OverwritePolicy = Field(default_factory=OverwritePolicy)
    dry_run: bool = False

    @property
    def masked_token(self) -> str:
        return mask_token(self.token)


class CommentAction(BaseModel):
    """What a run did on the pull request."""

    pr_number: int
    action: Literal["created", "edited"]
    comment_id: int | None = None
    body: str
