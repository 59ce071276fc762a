"""
Enums used across the application.
"""

from enum import Enum


class TemplateType(str, Enum):
    """Guided template a work story was authored from."""

    PROJECT = "project"
    ROLE_HIGHLIGHT = "role_highlight"
    LESSONS_LEARNED = "lessons_learned"


class StoryStatus(str, Enum):
    """Authoring state of a work story."""

    DRAFT = "draft"
    PUBLISHED = "published"


class AssetType(str, Enum):
    """Kind of file attached to a story."""

    IMAGE = "image"
    VIDEO = "video"
    PDF = "pdf"


class ShareKind(str, Enum):
    """
    Which shareable entity a public token resolved to.

    PROFILE is a curated subset of stories; SHARE_LINK is the legacy
    single link that exposes all of the owner's stories.
    """

    PROFILE = "profile"
    SHARE_LINK = "share_link"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persist enum values (not member names) in enum columns."""
    return [member.value for member in enum_cls]
