"""Dry-run wrapper that intercepts write operations and logs them.

Read operations (PR lookup, comment listing) pass through to the real GitHub
API. Write operations (create_comment, edit_comment) are logged instead of
being executed.

Usage:
    PR_COMMENTATOR_DRY_RUN=true pr-commentator --repo-url ... --ref ... --comment ...
"""

import json
import logging

from .github import metadata
from .github.public_api import Comment, CommentApi

logger = logging.getLogger("pr_commentator.dry_run")

LOGGED_BODY_LENGTH = 500


class DryRunCommentApi(CommentApi):
    """Wraps a real CommentApi. Reads pass through; writes are logged."""

    def __init__(self, real: CommentApi):
        self._real = real
        self.actions: list[dict] = []

    def _log(self, action: str, **kwargs) -> None:
        self.actions.append({"action": action, **kwargs})
        logger.info(f"[DRY RUN] {action}: {json.dumps(kwargs, default=str)}")

    # ---- READS (pass through) ----

    async def resolve_pr_for_ref(self, owner: str, repo: str, ref_name: str) -> int:
        return await self._real.resolve_pr_for_ref(owner, repo, ref_name)

    async def list_comments(self, owner: str, repo: str, pr_number: int) -> list[Comment]:
        return await self._real.list_comments(owner, repo, pr_number)

    # ---- WRITES (intercepted) ----

    async def create_comment(self, owner: str, repo: str, pr_number: int, body: str) -> None:
        self._log(
            "create_comment",
            repo=f"{owner}/{repo}",
            pr_number=pr_number,
            body=metadata.strip(body)[:LOGGED_BODY_LENGTH],
        )

    async def edit_comment(self, owner: str, repo: str, comment_id: int, body: str) -> None:
        self._log(
            "edit_comment",
            repo=f"{owner}/{repo}",
            comment_id=comment_id,
            body=metadata.strip(body)[:LOGGED_BODY_LENGTH],
        )

    async def close(self) -> None:
        await self._real.close()
