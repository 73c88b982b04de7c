"""Random genealogist, a noise baseline to calibrate the other genealogists.

Every call draws a uniform integer in [0; 100].  One generator is created per
procurement and shared by every call of that genealogist; a lock guards it so
scoring may run on several threads.  Seeding the service makes a procurement
reproducible when scored sequentially.
"""

import random
import threading
from collections.abc import Collection

from ...models import Post
from ..scores import MAX_SCORE, MIN_SCORE
from .base import Genealogist, GenealogistService, RelationType, TypedRelation

TYPE = RelationType("random")


class RandomGenealogist(Genealogist):

    def __init__(self, rng: random.Random):
        self._rng = rng
        self._lock = threading.Lock()

    @property
    def relation_type(self) -> RelationType:
        return TYPE

    def infer(self, post1: Post, post2: Post) -> TypedRelation:
        with self._lock:
            score = self._rng.randint(MIN_SCORE, MAX_SCORE)
        return self.relate(post1, post2, score)


class RandomGenealogistService(GenealogistService):
    """Procures random genealogists, seeded with *seed* if one is given."""

    def __init__(self, seed: int | None = None):
        self.seed = seed

    @property
    def name(self) -> str:
        return str(TYPE)

    def procure(self, posts: Collection[Post]) -> Genealogist:
        return RandomGenealogist(random.Random(self.seed))
