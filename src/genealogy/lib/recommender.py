"""Ranking of relations into per-post recommendations."""

import logging
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, model_validator

from ..errors import InvalidArgument
from ..models import Post
from .genealogy import Relation

logger = logging.getLogger(__name__)


class Recommendation(BaseModel):
    """The best related posts for one post, best first."""

    model_config = ConfigDict(frozen=True)

    post: Post
    recommended_posts: tuple[Post, ...]

    @model_validator(mode="after")
    def not_self_recommending(self):
        if self.post in self.recommended_posts:
            raise InvalidArgument(f"A post can't recommend itself: {self.post.slug}")
        return self

    def __repr__(self) -> str:
        slugs = ", ".join(post.slug for post in self.recommended_posts)
        return f"Recommendation(post={self.post.slug}, recommended_posts=[{slugs}])"


def _by_decreasing_score(relation: Relation) -> tuple[int, str]:
    # ties: destination slug, ascending
    return -relation.score, relation.post2.slug


class Recommender:

    def recommend(self, relations: Iterable[Relation], per_post: int) -> list[Recommendation]:
        """Recommend up to *per_post* posts for every post with outgoing relations.

        Recommendations are ordered by the slug of their post.  Posts without
        outgoing relations get no recommendation at all.
        """
        if per_post < 1:
            raise InvalidArgument(f"K must be positive: {per_post}")

        by_post: dict[str, list[Relation]] = {}
        for relation in relations:
            by_post.setdefault(relation.post1.slug, []).append(relation)

        recommendations = []
        for slug in sorted(by_post):
            ranked = sorted(by_post[slug], key=_by_decreasing_score)[:per_post]
            recommendations.append(
                Recommendation(
                    post=ranked[0].post1,
                    recommended_posts=tuple(relation.post2 for relation in ranked),
                )
            )

        logger.info("Recommended up to %d posts for each of %d posts", per_post, len(recommendations))
        return recommendations
