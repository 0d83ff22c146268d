"""Tests for choosing the comment to overwrite."""

import logging
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from pr_commentator.commentator import OverwriteMode, OverwritePolicy, select_comment_to_overwrite
from pr_commentator.github import Comment, metadata
from pr_commentator.github.metadata import METADATA_TAG


def managed(comment_id: int, identifier: str | None = None, text: str = "report") -> Comment:
    return Comment(id=comment_id, body=metadata.encode(text, identifier))


def unmanaged(comment_id: int, text: str = "LGTM") -> Comment:
    return Comment(id=comment_id, body=text)


def malformed(comment_id: int) -> Comment:
    return Comment(id=comment_id, body=f"report\n\n{METADATA_TAG}\"truncated")


ALWAYS = OverwritePolicy(mode=OverwriteMode.ALWAYS)
NEVER = OverwritePolicy(mode=OverwriteMode.NEVER)


class TestOverwritePolicy:
    """Building the policy from CLI-style options."""

    def test_default_is_always(self):
        assert OverwritePolicy.from_options() == OverwritePolicy(mode=OverwriteMode.ALWAYS)

    def test_explicit_mode(self):
        assert OverwritePolicy.from_options(OverwriteMode.NEVER).mode == OverwriteMode.NEVER

    @pytest.mark.parametrize("mode", [None, OverwriteMode.NEVER, OverwriteMode.ALWAYS])
    def test_identifier_implies_using_identifier(self, mode):
        policy = OverwritePolicy.from_options(mode, "build-7")

        assert policy.mode == OverwriteMode.USING_IDENTIFIER
        assert policy.identifier == "build-7"

    def test_policy_is_immutable(self):
        with pytest.raises(ValidationError):
            ALWAYS.mode = OverwriteMode.NEVER


class TestNever:
    def test_never_skips_scanning(self, monkeypatch):
        decode = MagicMock()
        monkeypatch.setattr(metadata, "decode", decode)

        comments = [managed(1), managed(2, "build-7"), unmanaged(3)]

        assert select_comment_to_overwrite(comments, NEVER) is None
        decode.assert_not_called()


class TestAlways:
    def test_last_managed_comment_wins(self):
        comments = [unmanaged(1), managed(2, "A"), managed(3, "B")]

        assert select_comment_to_overwrite(comments, ALWAYS) == 3

    def test_trailing_unmanaged_comments_are_ignored(self):
        comments = [managed(1), unmanaged(2), unmanaged(3)]

        assert select_comment_to_overwrite(comments, ALWAYS) == 1

    def test_only_unmanaged(self):
        assert select_comment_to_overwrite([unmanaged(1), unmanaged(2)], ALWAYS) is None

    def test_empty_list(self):
        assert select_comment_to_overwrite([], ALWAYS) is None


class TestUsingIdentifier:
    def test_only_matching_identifier(self):
        policy = OverwritePolicy.from_options(identifier="X")
        comments = [managed(1, "X"), managed(2, "Y"), malformed(3)]

        assert select_comment_to_overwrite(comments, policy) == 1

    def test_last_matching_identifier_wins(self):
        policy = OverwritePolicy.from_options(identifier="X")
        comments = [managed(1, "X"), managed(2, "Y"), managed(3, "X")]

        assert select_comment_to_overwrite(comments, policy) == 3

    def test_missing_identifier_matches_missing_identifier(self):
        policy = OverwritePolicy(mode=OverwriteMode.USING_IDENTIFIER)
        comments = [managed(1, None), managed(2, "build-7")]

        assert select_comment_to_overwrite(comments, policy) == 1

    def test_identifier_match_is_exact(self):
        policy = OverwritePolicy.from_options(identifier="build-7")
        comments = [managed(1, "build-70"), managed(2, "Build-7"), managed(3, "")]

        assert select_comment_to_overwrite(comments, policy) is None


class TestMalformedMarkers:
    def test_malformed_comment_is_skipped_and_logged(self, caplog):
        comments = [managed(1), malformed(2)]

        with caplog.at_level(logging.WARNING, logger="pr_commentator.overwrite"):
            assert select_comment_to_overwrite(comments, ALWAYS) == 1

        assert "comment 2" in caplog.text

    def test_scan_continues_after_malformed_comment(self):
        comments = [malformed(1), managed(2), malformed(3), managed(4), malformed(5)]

        assert select_comment_to_overwrite(comments, ALWAYS) == 4
