"""Where the comment text comes from: a literal, a file or stdin."""

import logging
import sys
from pathlib import Path
from typing import Literal, TextIO

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger("pr_commentator.source")


class SourceReadError(Exception):
    """The comment text could not be read."""


class CommentSource(BaseModel):
    """A comment text source, read once per run."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["literal", "file", "stdin"]
    comment: str | None = None
    path: Path | None = None

    @classmethod
    def literal(cls, comment: str) -> "CommentSource":
        return cls(kind="literal", comment=comment)

    @classmethod
    def file(cls, path: str | Path) -> "CommentSource":
        return cls(kind="file", path=Path(path))

    @classmethod
    def stdin(cls) -> "CommentSource":
        return cls(kind="stdin")

    def retrieve(self, stdin: TextIO | None = None) -> str:
        """Return the comment text.

        Raises:
            SourceReadError: The file or stream could not be read.
        """
        if self.kind == "literal":
            return self.comment or ""

        if self.kind == "file":
            logger.debug(f"Reading file {self.path} for comment")
            try:
                return self.path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise SourceReadError(f"Failed to read comment from file {self.path}: {e}") from e

        logger.debug("Reading stdin for comment")
        stream = stdin if stdin is not None else sys.stdin
        try:
            return stream.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"Failed to read comment from stdin: {e}") from e

    def __str__(self) -> str:
        if self.kind == "file":
            return f"file {self.path}"
        return self.kind
