"""
Unit Tests for Field Validation.

Tests constraint checks and localized messages against the comment
field table and small custom tables.
"""

import pytest

from guestbook.core.exceptions import ValidationError
from guestbook.validation import (
    COMMENT_FIELDS,
    Constraint,
    FieldSpec,
    collect_errors,
    validate,
)
from guestbook.validation.fields import MAX, REQUIRED
from guestbook.validation.messages import render_message

REQUIRED_TEXT = "コメントは必須フィールドです"
TOO_LONG_TEXT = "コメントの長さは最大でも20文字でなければなりません"


class TestCommentFields:
    """Tests for the comment field table."""

    def test_text_limits(self):
        text = COMMENT_FIELDS["text"]

        assert text.constraints == (Constraint(REQUIRED), Constraint(MAX, 20))
        assert text.storage_length == 399

    def test_name_has_no_constraints(self):
        name = COMMENT_FIELDS["name"]

        assert name.constraints == ()
        assert name.default == "名無し"
        assert name.storage_length == 200


class TestConstraint:
    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError, match="Unknown constraint kind"):
            Constraint("email")

    def test_max_needs_limit(self):
        with pytest.raises(ValueError):
            Constraint(MAX)


class TestRenderMessage:
    def test_uses_display_name(self):
        spec = COMMENT_FIELDS["text"]

        assert render_message(spec, Constraint(REQUIRED)) == REQUIRED_TEXT

    def test_falls_back_to_field_name(self):
        spec = FieldSpec(name="title", column="title")

        assert render_message(spec, Constraint(MAX, 5)) == (
            "titleの長さは最大でも5文字でなければなりません"
        )


class TestValidateComment:
    """Tests for validate() with the comment field table."""

    def test_valid_comment_passes(self):
        validate({"name": "job", "text": "hello"})

    @pytest.mark.parametrize("text", [None, ""])
    def test_missing_text(self, text):
        with pytest.raises(ValidationError) as exc_info:
            validate({"name": "job", "text": text})

        assert exc_info.value.message == REQUIRED_TEXT

    def test_text_at_limit_passes(self):
        validate({"text": "x" * 20})

    def test_text_over_limit(self):
        with pytest.raises(ValidationError) as exc_info:
            validate({"text": "x" * 21})

        assert exc_info.value.message == TOO_LONG_TEXT

    def test_counts_characters_not_bytes(self):
        """Twenty Japanese characters are sixty UTF-8 bytes but still valid."""
        validate({"text": "あ" * 20})

        with pytest.raises(ValidationError):
            validate({"text": "あ" * 21})

    def test_name_is_not_checked(self):
        validate({"name": "n" * 500, "text": "hello"})

    def test_reads_object_attributes(self):
        class Candidate:
            name = "job"
            text = ""

        assert collect_errors(Candidate()) == [REQUIRED_TEXT]


class TestCollectErrors:
    """Tests for message collection across several fields."""

    FIELDS = {
        "title": FieldSpec(
            name="title",
            column="title",
            display_name="タイトル",
            constraints=(Constraint(REQUIRED), Constraint(MAX, 3)),
        ),
        "body": FieldSpec(
            name="body",
            column="body",
            display_name="本文",
            constraints=(Constraint(REQUIRED),),
        ),
    }

    def test_one_message_per_field(self):
        """A missing value reports required only, not its length."""
        errors = collect_errors({}, self.FIELDS)

        assert errors == ["タイトルは必須フィールドです", "本文は必須フィールドです"]

    def test_messages_joined_with_comma(self):
        with pytest.raises(ValidationError) as exc_info:
            validate({"title": "long"}, self.FIELDS)

        assert exc_info.value.message == (
            "タイトルの長さは最大でも3文字でなければなりません, 本文は必須フィールドです"
        )

    def test_valid_record_has_no_errors(self):
        assert collect_errors({"title": "abc", "body": "x"}, self.FIELDS) == []
