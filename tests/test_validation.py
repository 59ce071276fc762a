from uuid import uuid4

import pytest

from src.shared.core.exceptions import ValidationError
from src.shared.utils.validation import (
    MAX_STORIES_PER_PROFILE,
    STORY_RESPONSE_MAX,
    STORY_TITLE_MAX,
    ensure_below_limit,
    sanitize_text_input,
    sanitize_user_name,
    validate_bio,
    validate_email,
    validate_headline,
    validate_profile_name,
    validate_story_ids,
    validate_story_responses,
    validate_story_title,
    validate_uuid,
    validate_video_url,
    youtube_embed_url,
)


class TestTitles:
    def test_title_at_limit_is_accepted(self):
        assert validate_story_title("t" * STORY_TITLE_MAX) == "t" * STORY_TITLE_MAX

    def test_title_over_limit_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            validate_story_title("t" * (STORY_TITLE_MAX + 1))
        assert exc.value.field == "title"

    @pytest.mark.parametrize("title", ["", "   ", "\t\n", None, 42])
    def test_blank_or_non_text_title_is_rejected(self, title):
        with pytest.raises(ValidationError):
            validate_story_title(title)

    def test_title_is_trimmed(self):
        assert validate_story_title("  Billing rewrite  ") == "Billing rewrite"

    def test_profile_name_is_required(self):
        with pytest.raises(ValidationError) as exc:
            validate_profile_name("   ")
        assert exc.value.field == "name"
        assert validate_profile_name("Backend work") == "Backend work"


class TestOverrides:
    def test_blank_headline_clears_override(self):
        assert validate_headline("   ") is None
        assert validate_headline(None) is None

    def test_headline_over_limit_is_rejected(self):
        with pytest.raises(ValidationError):
            validate_headline("h" * 201)

    def test_bio_limit(self):
        assert validate_bio("b" * 2000) == "b" * 2000
        with pytest.raises(ValidationError):
            validate_bio("b" * 2001)


class TestResponses:
    def test_response_at_limit_is_accepted(self):
        cleaned = validate_story_responses({"problem": "r" * STORY_RESPONSE_MAX})
        assert len(cleaned["problem"]) == STORY_RESPONSE_MAX

    def test_response_over_limit_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            validate_story_responses({"problem": "r" * (STORY_RESPONSE_MAX + 1)})
        assert exc.value.field == "responses"
        assert "problem" in exc.value.reason

    def test_too_many_keys_is_rejected(self):
        with pytest.raises(ValidationError):
            validate_story_responses({f"k{i}": "" for i in range(21)})

    def test_null_response_becomes_empty_string(self):
        assert validate_story_responses({"problem": None}) == {"problem": ""}

    def test_non_mapping_is_rejected(self):
        with pytest.raises(ValidationError):
            validate_story_responses(["problem"])


class TestSanitizers:
    def test_null_bytes_and_zero_width_characters_are_removed(self):
        assert sanitize_text_input("a\x00b\u200bc\ufeff") == "abc"

    def test_user_name_drops_html_characters(self):
        assert sanitize_user_name('  <b>Ada</b> "L" ') == "bAda/b L"


class TestIds:
    def test_uuid_string_is_parsed(self):
        value = uuid4()
        assert validate_uuid(str(value)) == value

    def test_bad_uuid_is_rejected(self):
        with pytest.raises(ValidationError):
            validate_uuid("not-a-uuid", "story_id")

    def test_story_ids_keep_order(self):
        ids = [uuid4() for _ in range(3)]
        assert validate_story_ids([str(i) for i in ids]) == ids

    def test_story_ids_reject_duplicates(self):
        value = str(uuid4())
        with pytest.raises(ValidationError):
            validate_story_ids([value, value])

    def test_story_ids_limit(self):
        validate_story_ids([uuid4() for _ in range(MAX_STORIES_PER_PROFILE)])
        with pytest.raises(ValidationError):
            validate_story_ids([uuid4() for _ in range(MAX_STORIES_PER_PROFILE + 1)])

    def test_story_ids_must_be_a_list(self):
        with pytest.raises(ValidationError):
            validate_story_ids("abc")


class TestLimitsAndMisc:
    def test_limit_rejects_at_capacity(self):
        ensure_below_limit("profiles", 49, 50, "profiles")
        with pytest.raises(ValidationError):
            ensure_below_limit("profiles", 50, 50, "profiles")

    def test_email(self):
        assert validate_email("ada@example.com") == "ada@example.com"
        with pytest.raises(ValidationError):
            validate_email("not-an-email")

    def test_youtube_urls(self):
        assert validate_video_url("") is None
        assert (
            youtube_embed_url("https://youtu.be/dQw4w9WgXcQ")
            == "https://www.youtube.com/embed/dQw4w9WgXcQ"
        )
        with pytest.raises(ValidationError):
            validate_video_url("https://vimeo.com/123")
