"""Type-affinity genealogist.

Scores a pair by the kind of the *second* post only: videos are the most
attractive recommendation, talks the least.  Kinds this module does not know
score 0.  The score ignores the first post, so it is asymmetric.
"""

from collections.abc import Collection

from ...models import Article, Post, Talk, Video
from .base import Genealogist, GenealogistService, RelationType, TypedRelation

TYPE = RelationType("type")

# Checked in order; the first matching kind wins.
KIND_SCORES: tuple[tuple[type[Post], int], ...] = (
    (Article, 50),
    (Video, 90),
    (Talk, 20),
)


def kind_score(post: Post) -> int:
    for kind, score in KIND_SCORES:
        if isinstance(post, kind):
            return score
    return 0


class TypeAffinityGenealogist(Genealogist):

    @property
    def relation_type(self) -> RelationType:
        return TYPE

    def infer(self, post1: Post, post2: Post) -> TypedRelation:
        return self.relate(post1, post2, kind_score(post2))


class TypeAffinityGenealogistService(GenealogistService):

    @property
    def name(self) -> str:
        return str(TYPE)

    def procure(self, posts: Collection[Post]) -> Genealogist:
        return TypeAffinityGenealogist()
