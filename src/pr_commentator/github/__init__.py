"""GitHub API layer: client, models and comment metadata."""

from .github_client import GitHubClient, branch_from_ref, mask_token
from .metadata import MetadataDecodeError, MetadataMarker
from .public_api import (
    # Models
    Comment,
    PullRequestSummary,
    RepoCoordinates,
    # Errors
    ApiError,
    MalformedResponse,
    NotFound,
    TransportError,
    UnexpectedStatus,
    # ABC interface
    CommentApi,
)
from .repo_url import InvalidRepoUrl, RepoInfo, parse_repo_url

__all__ = [
    # Public API - Models
    "Comment",
    "PullRequestSummary",
    "RepoCoordinates",
    # Public API - Errors
    "ApiError",
    "MalformedResponse",
    "NotFound",
    "TransportError",
    "UnexpectedStatus",
    # Public API - Interface
    "CommentApi",
    # Implementation
    "GitHubClient",
    "branch_from_ref",
    "mask_token",
    # Metadata
    "MetadataDecodeError",
    "MetadataMarker",
    # Repository urls
    "InvalidRepoUrl",
    "RepoInfo",
    "parse_repo_url",
]
