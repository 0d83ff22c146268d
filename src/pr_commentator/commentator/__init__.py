"""Comment selection and the end-to-end commenting run."""

from .comment_source import CommentSource, SourceReadError
from .orchestrator import run
from .overwrite import select_comment_to_overwrite
from .public_api import CommentAction, OverwriteMode, OverwritePolicy, RunConfig

__all__ = [
    "CommentAction",
    "CommentSource",
    "OverwriteMode",
    "OverwritePolicy",
    "RunConfig",
    "SourceReadError",
    "run",
    "select_comment_to_overwrite",
]
