"""Embed and extract the pr_commentator marker in comment bodies.

The marker is a hidden HTML comment appended to the visible text:
<!-- pr_commentator : "build-7" -->

The payload is the JSON encoding of the identifier, ``null`` when there is
none. Comments without the tag are not managed by this tool.
"""

import json

from pydantic import BaseModel, ConfigDict

METADATA_TAG = "<!-- pr_commentator : "
METADATA_END = " -->"


class MetadataDecodeError(ValueError):
    """The tag is present but the marker around it is malformed."""


class MetadataMarker(BaseModel):
    """Decoded content of a marker."""

    model_config = ConfigDict(frozen=True)

    identifier: str | None = None


def _dump_identifier(identifier: str | None) -> str:
    # "<" and ">" are escaped so an identifier can't close the HTML comment.
    return json.dumps(identifier).replace("<", "\\u003c").replace(">", "\\u003e")


def encode(body: str, identifier: str | None = None) -> str:
    """Append a hidden marker carrying ``identifier`` to a comment body."""
    return f"{body}\n\n{METADATA_TAG}{_dump_identifier(identifier)}{METADATA_END}"


def decode(body: str) -> MetadataMarker | None:
    """Extract the marker from a comment body.

    Returns None when the body carries no tag at all. The last tag wins since
    ``encode`` always appends.

    Raises:
        MetadataDecodeError: The tag is present but its payload is unreadable.
    """
    start = body.rfind(METADATA_TAG)
    if start == -1:
        return None

    payload_start = start + len(METADATA_TAG)
    end = body.find(METADATA_END, payload_start)
    if end == -1:
        raise MetadataDecodeError(f"Unterminated marker: {body[start:start + 80]!r}")

    payload = body[payload_start:end]
    try:
        identifier = json.loads(payload)
    except json.JSONDecodeError as e:
        raise MetadataDecodeError(f"Invalid marker payload {payload!r}: {e}") from e

    if identifier is not None and not isinstance(identifier, str):
        raise MetadataDecodeError(
            f"Marker identifier must be a string or null, got {type(identifier).__name__}"
        )
    return MetadataMarker(identifier=identifier)


def strip(body: str) -> str:
    """Remove a trailing marker written by ``encode``."""
    start = body.rfind(METADATA_TAG)
    if start == -1:
        return body
    end = body.find(METADATA_END, start + len(METADATA_TAG))
    if end == -1 or end + len(METADATA_END) != len(body):
        return body
    visible = body[:start]
    return visible[:-2] if visible.endswith("\n\n") else visible
