"""
Input Validation

Bounds checks for every text and list input before it reaches storage.
Each validator raises ValidationError(field, reason) on failure and returns
the cleaned value otherwise.

Limits:
=======
    ┌──────────────────────────────┬───────────┐
    │ profile name (trimmed)       │ 1..100    │
    │ headline                     │ ≤ 200     │
    │ bio                          │ ≤ 2000    │
    │ story title (trimmed)        │ 1..200    │
    │ story response (per key)     │ ≤ 10,000  │
    │ response keys per story      │ ≤ 20      │
    │ assets per story             │ ≤ 50      │
    │ stories per profile          │ ≤ 100     │
    │ profiles per user            │ ≤ 50      │
    │ stories per user             │ ≤ 500     │
    │ email                        │ ≤ 320     │
    └──────────────────────────────┴───────────┘

Usage:
======
    from src.shared.utils.validation import validate_profile_name

    name = validate_profile_name("  Staff Engineer  ")   # "Staff Engineer"
    validate_profile_name("   ")                         # raises ValidationError
"""

import re
from typing import Any, Iterable, List, Mapping, Optional
from uuid import UUID

from src.shared.core.exceptions import ValidationError


PROFILE_NAME_MAX = 100
HEADLINE_MAX = 200
BIO_MAX = 2000
STORY_TITLE_MAX = 200
STORY_RESPONSE_MAX = 10_000
MAX_RESPONSE_FIELDS_PER_STORY = 20
MAX_ASSETS_PER_STORY = 50
MAX_STORIES_PER_PROFILE = 100
MAX_PROFILES_PER_USER = 50
MAX_STORIES_PER_USER = 500
EMAIL_MAX = 320
USER_NAME_MAX = 100

_ZERO_WIDTH = re.compile("[\u200b-\u200d\ufeff]")
_HTML_CHARS = re.compile(r"[<>\"']")
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_YOUTUBE_PATTERN = re.compile(
    r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([a-zA-Z0-9_-]{11})"
)


# ═══════════════════════════════════════════════════════════════════════════════
# SANITIZERS
# ═══════════════════════════════════════════════════════════════════════════════


def sanitize_text_input(value: str) -> str:
    """Remove null bytes and zero-width characters."""
    return _ZERO_WIDTH.sub("", value.replace("\x00", ""))


def sanitize_user_name(name: str) -> str:
    """
    Clean a display name coming from an identity provider.

    Strips HTML-like characters, trims and caps the length.
    """
    return _HTML_CHARS.sub("", sanitize_text_input(name)).strip()[:USER_NAME_MAX]


# ═══════════════════════════════════════════════════════════════════════════════
# TEXT FIELDS
# ═══════════════════════════════════════════════════════════════════════════════


def _require_text(field: str, value: Any, label: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise ValidationError(field, f"{label} is required")

    trimmed = sanitize_text_input(value).strip()
    if not trimmed:
        raise ValidationError(field, f"{label} is required")
    if len(trimmed) > max_length:
        raise ValidationError(field, f"{label} must be {max_length} characters or less")
    return trimmed


def _optional_text(field: str, value: Any, label: str, max_length: int) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(field, f"{label} must be text")

    cleaned = sanitize_text_input(value)
    if len(cleaned) > max_length:
        raise ValidationError(field, f"{label} must be {max_length} characters or less")
    # Blank overrides are stored as NULL so the owner's default shows through
    return cleaned if cleaned.strip() else None


def validate_profile_name(name: Any) -> str:
    return _require_text("name", name, "Profile name", PROFILE_NAME_MAX)


def validate_headline(headline: Any) -> Optional[str]:
    return _optional_text("headline", headline, "Headline", HEADLINE_MAX)


def validate_bio(bio: Any) -> Optional[str]:
    return _optional_text("bio", bio, "Bio", BIO_MAX)


def validate_story_title(title: Any) -> str:
    return _require_text("title", title, "Story title", STORY_TITLE_MAX)


def validate_user_name(name: Any) -> str:
    return _require_text("name", name, "Name", USER_NAME_MAX)


def validate_story_responses(responses: Any) -> dict[str, str]:
    """
    Validate the prompt-key → markdown mapping of a story.

    Raises:
        ValidationError: Too many keys, a non-text value, or a response
            longer than 10,000 characters
    """
    if not isinstance(responses, Mapping):
        raise ValidationError("responses", "Responses must be an object")

    if len(responses) > MAX_RESPONSE_FIELDS_PER_STORY:
        raise ValidationError(
            "responses",
            f"Too many response fields. Maximum {MAX_RESPONSE_FIELDS_PER_STORY} allowed.",
        )

    cleaned: dict[str, str] = {}
    for key, value in responses.items():
        if value is None:
            value = ""
        if not isinstance(key, str) or not isinstance(value, str):
            raise ValidationError("responses", "Responses must map text keys to text")
        if len(value) > STORY_RESPONSE_MAX:
            raise ValidationError(
                "responses",
                f"{key}: Response must be {STORY_RESPONSE_MAX} characters or less",
            )
        cleaned[key] = sanitize_text_input(value)
    return cleaned


def validate_email(email: Any) -> str:
    if not isinstance(email, str) or not email:
        raise ValidationError("email", "Email is required")
    if len(email) > EMAIL_MAX:
        raise ValidationError("email", "Email address is too long")
    if not _EMAIL_PATTERN.match(email):
        raise ValidationError("email", "Please enter a valid email address")
    return email


# ═══════════════════════════════════════════════════════════════════════════════
# IDS AND COUNTS
# ═══════════════════════════════════════════════════════════════════════════════


def validate_uuid(value: Any, field: str = "id") -> UUID:
    """Parse a UUID from a UUID or its string form."""
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str) or not value:
        raise ValidationError(field, "ID is required")
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(field, "Invalid ID format")


def validate_uuid_list(values: Any, max_length: int, field: str = "story_ids") -> List[UUID]:
    """
    Validate an ordered list of ids.

    Duplicates are rejected; order is preserved.
    """
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise ValidationError(field, "Expected an array")

    ids = [validate_uuid(value, field) for value in values]
    if len(ids) > max_length:
        raise ValidationError(field, f"Too many items. Maximum {max_length} allowed.")
    if len(set(ids)) != len(ids):
        raise ValidationError(field, "Duplicate ids are not allowed")
    return ids


def validate_story_ids(story_ids: Any) -> List[UUID]:
    return validate_uuid_list(story_ids, MAX_STORIES_PER_PROFILE)


def validate_asset_count(count: int) -> None:
    if count > MAX_ASSETS_PER_STORY:
        raise ValidationError(
            "assets", f"Too many assets. Maximum {MAX_ASSETS_PER_STORY} allowed."
        )


def ensure_below_limit(field: str, current: int, limit: int, label: str) -> None:
    """Reject creating one more item when the owner already has `limit`."""
    if current >= limit:
        raise ValidationError(field, f"You can have at most {limit} {label}")


# ═══════════════════════════════════════════════════════════════════════════════
# YOUTUBE
# ═══════════════════════════════════════════════════════════════════════════════


def extract_youtube_id(url: Optional[str]) -> Optional[str]:
    """Video id from a watch, short or embed URL, or None."""
    if not url:
        return None
    match = _YOUTUBE_PATTERN.search(url)
    return match.group(1) if match else None


def youtube_embed_url(url: Optional[str]) -> Optional[str]:
    video_id = extract_youtube_id(url)
    return f"https://www.youtube.com/embed/{video_id}" if video_id else None


def validate_video_url(url: Any) -> Optional[str]:
    if url is None or url == "":
        return None
    if not isinstance(url, str) or extract_youtube_id(url) is None:
        raise ValidationError("video_url", "Please enter a valid YouTube URL")
    return url
