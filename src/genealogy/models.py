"""Post entities shared by the loader, the genealogists and the renderer.

Posts are immutable and identified by their slug: two posts with the same slug
are equal and hash alike, whatever their other fields say.
"""

import datetime
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

_OUTER_QUOTES = re.compile(r'^"|"$')


def remove_outer_quotation_marks(text: str) -> str:
    """Strip one leading and one trailing double quote, if present."""
    return _OUTER_QUOTES.sub("", text)


def _require_text(value: str, what: str) -> str:
    if not value or value.isspace():
        raise ValueError(f"{what} can't have an empty text")
    return value


class Post(BaseModel):
    """Base class of everything that can be recommended."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Title, without outer quotation marks")
    tags: frozenset[str] = Field(default_factory=frozenset)
    date: datetime.date
    description: str
    slug: str = Field(..., description="Stable, unique identifier of the post")

    @field_validator("title", mode="before")
    @classmethod
    def unquote_title(cls, value):
        if isinstance(value, str):
            value = remove_outer_quotation_marks(value)
        return value

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return _require_text(value, "Titles")

    @field_validator("description", mode="before")
    @classmethod
    def unquote_description(cls, value):
        if isinstance(value, str):
            value = remove_outer_quotation_marks(value).strip()
        return value

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        return _require_text(value, "Descriptions")

    @field_validator("slug")
    @classmethod
    def slug_not_blank(cls, value: str) -> str:
        return _require_text(value, "Slugs")

    @field_validator("tags")
    @classmethod
    def tags_not_blank(cls, value: frozenset[str]) -> frozenset[str]:
        for tag in value:
            _require_text(tag, "Tags")
        return value

    def __eq__(self, other) -> bool:
        if not isinstance(other, Post):
            return NotImplemented
        return self.slug == other.slug

    def __hash__(self) -> int:
        return hash(self.slug)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(slug={self.slug!r})"


class Article(Post):
    """A blog post, possibly accompanied by a code repository."""

    repository: str | None = Field(None, description="Identifier of the accompanying repository")
    content: tuple[str, ...] = Field(default_factory=tuple, description="Body lines after the front matter")

    @field_validator("repository")
    @classmethod
    def repository_not_blank(cls, value: str | None) -> str | None:
        return value if value is None else _require_text(value, "Repositories")


class Talk(Post):
    """A conference talk with slides and an optional recording."""

    slides: str = Field(..., description="Location of the slides")
    video: str | None = Field(None, description="Slug of the recording, if any")

    @field_validator("slides", "video")
    @classmethod
    def links_not_blank(cls, value: str | None) -> str | None:
        return value if value is None else _require_text(value, "Talk links")


class Video(Post):
    """A video, possibly accompanied by a code repository."""

    video: str = Field(..., description="Slug of the video on the hosting platform")
    repository: str | None = Field(None, description="Identifier of the accompanying repository")

    @field_validator("video", "repository")
    @classmethod
    def links_not_blank(cls, value: str | None) -> str | None:
        return value if value is None else _require_text(value, "Video links")


def repository_of(post: Post) -> str | None:
    """Return the repository identifier of *post*, or ``None`` for kinds without one."""
    if isinstance(post, (Article, Video)):
        return post.repository
    return None
