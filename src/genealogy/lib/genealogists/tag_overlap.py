"""Tag-overlap genealogist.

Scores a pair of posts by the Dice coefficient of their tag sets::

    score = 100 * 2 * |tags1 & tags2| / (|tags1| + |tags2|)

The coefficient is symmetric, so both directions of a pair score alike.  Two
posts without any tags score 0.
"""

from collections.abc import Collection

from ...models import Post
from ..scores import round_half_up
from .base import Genealogist, GenealogistService, RelationType, TypedRelation

TYPE = RelationType("tag")


def dice_coefficient(tags1: frozenset[str], tags2: frozenset[str]) -> float:
    """Return ``2 * |A & B| / (|A| + |B|)``, or 0.0 if both sets are empty."""
    total = len(tags1) + len(tags2)
    if total == 0:
        return 0.0
    return 2 * len(tags1 & tags2) / total


class TagOverlapGenealogist(Genealogist):

    @property
    def relation_type(self) -> RelationType:
        return TYPE

    def infer(self, post1: Post, post2: Post) -> TypedRelation:
        score = round_half_up(100 * dice_coefficient(post1.tags, post2.tags))
        return self.relate(post1, post2, score)


class TagOverlapGenealogistService(GenealogistService):

    @property
    def name(self) -> str:
        return str(TYPE)

    def procure(self, posts: Collection[Post]) -> Genealogist:
        return TagOverlapGenealogist()
