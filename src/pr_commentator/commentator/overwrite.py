"""Pick the existing generated comment a new comment should replace."""

import logging
from collections.abc import Iterable

from ..github import metadata
from ..github.public_api import Comment
from .public_api import OverwriteMode, OverwritePolicy

logger = logging.getLogger("pr_commentator.overwrite")


def select_comment_to_overwrite(
    comments: Iterable[Comment], policy: OverwritePolicy
) -> int | None:
    """Return the id of the comment to overwrite, or None to post a new one.

    Comments without a marker are ignored, and so are comments whose marker
    can't be decoded. With several matches the last one in listing order
    wins, which is the most recently created comment.
    """
    if policy.mode == OverwriteMode.NEVER:
        return None

    selected: int | None = None
    for comment in comments:
        try:
            marker = metadata.decode(comment.body)
        except metadata.MetadataDecodeError as e:
            logger.warning(f"Failed to parse metadata of comment {comment.id}: {e}")
            continue

        if marker is None:
            continue

        if policy.mode == OverwriteMode.ALWAYS or marker.identifier == policy.identifier:
            selected = comment.id

    return selected
