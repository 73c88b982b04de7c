"""Title-letter genealogist, a deliberately naive baseline.

Scores the share of distinct (lower-cased) characters of the first post's
title that also appear in the second post's title.  The denominator only
looks at the first title, so the score is asymmetric.
"""

from collections.abc import Collection

from ...models import Post
from ..scores import round_half_up
from .base import Genealogist, GenealogistService, RelationType, TypedRelation

TYPE = RelationType("silly")


def title_letters(post: Post) -> frozenset[str]:
    return frozenset(post.title.lower())


class TitleLetterGenealogist(Genealogist):

    @property
    def relation_type(self) -> RelationType:
        return TYPE

    def infer(self, post1: Post, post2: Post) -> TypedRelation:
        letters1 = title_letters(post1)
        # titles are never blank, so letters1 is never empty
        shared = letters1 & title_letters(post2)
        score = round_half_up(100 * len(shared) / len(letters1))
        return self.relate(post1, post2, score)


class TitleLetterGenealogistService(GenealogistService):

    @property
    def name(self) -> str:
        return str(TYPE)

    def procure(self, posts: Collection[Post]) -> Genealogist:
        return TitleLetterGenealogist()
