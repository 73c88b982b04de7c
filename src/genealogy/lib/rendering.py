"""JSON rendering of recommendations."""

import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter

from ..errors import ConfigError
from .recommender import Recommendation

logger = logging.getLogger(__name__)


class RecommendedPost(BaseModel):
    """A post as it appears in the list of recommendations."""

    title: str = Field(..., description="Title of the recommended post")
    slug: str = Field(..., description="Slug of the recommended post")


class RecommendationDocument(BaseModel):
    """The recommendations for one post."""

    title: str = Field(..., description="Title of the post the recommendations are for")
    slug: str = Field(..., description="Slug of the post the recommendations are for")
    recommendations: list[RecommendedPost] = Field(default_factory=list)


_documents = TypeAdapter(list[RecommendationDocument])


def to_document(recommendation: Recommendation) -> RecommendationDocument:
    return RecommendationDocument(
        title=recommendation.post.title,
        slug=recommendation.post.slug,
        recommendations=[
            RecommendedPost(title=post.title, slug=post.slug)
            for post in recommendation.recommended_posts
        ],
    )


def render_recommendations(recommendations: Iterable[Recommendation]) -> str:
    """Render recommendations as an indented JSON array."""
    documents = [to_document(recommendation) for recommendation in recommendations]
    return _documents.dump_json(documents, indent=2).decode("utf-8")


def write_recommendations(rendered: str, output_file: Path | None = None) -> None:
    """Write rendered recommendations to *output_file*, or to stdout if there is none."""
    if output_file is None:
        sys.stdout.write(rendered + "\n")
        return
    try:
        Path(output_file).write_text(rendered + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Writing recommendations failed: {output_file}: {exc}") from exc
    logger.info("Wrote recommendations to %s", output_file)
