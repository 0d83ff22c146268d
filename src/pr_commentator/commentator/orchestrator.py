"""Run one commenting pass: resolve the PR, pick a comment, create or edit."""

import logging
from typing import TextIO

from ..github import metadata
from ..github.public_api import CommentApi
from .overwrite import select_comment_to_overwrite
from .public_api import CommentAction, OverwriteMode, RunConfig

logger = logging.getLogger("pr_commentator.orchestrator")


async def run(config: RunConfig, api: CommentApi, stdin: TextIO | None = None) -> CommentAction:
    """Post or update the comment described by ``config``.

    Every step is awaited in turn and the first error propagates. Nothing is
    rolled back: running again simply creates or edits again.
    """
    owner, repo = config.repo.owner, config.repo.name
    policy = config.overwrite

    logger.debug(f"Reading comment from {config.comment_source}")
    comment = config.comment_source.retrieve(stdin=stdin)

    logger.debug(f"Determining PR number for {config.ref_name}")
    pr_number = await api.resolve_pr_for_ref(owner, repo, config.ref_name)

    target: int | None = None
    if policy.mode != OverwriteMode.NEVER:
        logger.debug(f"Searching comment to overwrite on PR#{pr_number}")
        comments = await api.list_comments(owner, repo, pr_number)
        target = select_comment_to_overwrite(comments, policy)

    body = metadata.encode(comment, policy.identifier)

    logger.debug(f"Commenting back to PR#{pr_number}")
    if target is not None:
        await api.edit_comment(owner, repo, target, body)
        result = CommentAction(pr_number=pr_number, action="edited", comment_id=target, body=body)
    else:
        await api.create_comment(owner, repo, pr_number, body)
        result = CommentAction(pr_number=pr_number, action="created", body=body)

    logger.info(f"Successfully commented back to PR#{pr_number} ({result.action})")
    return result
