"""Pairwise inference and weighted aggregation of relations.

The genealogy pipeline:

1. pair every post with every other post (both directions, never itself),
2. let every genealogist score every pair,
3. group the typed relations by the slugs of their ordered pair,
4. fold each group into one :class:`Relation`.

The aggregated score of a group is ``sum(score * weight) / count``.  It
divides by the number of typed relations, not by the sum of the weights, so
weights above 1.0 can push a score out of [0; 100]; such a score fails when
the relation is created.

Scoring is a pure function of the pair and may be spread over a thread
pool without changing the result.  The number of pairs grows quadratically
with the number of posts, which makes scoring the dominant cost; an optional
timeout bounds it.
"""

import concurrent.futures
import logging
import time
from collections import Counter
from collections.abc import Collection, Iterable, Sequence

from pydantic import BaseModel, ConfigDict, model_validator

from ..errors import EmptyAggregation, GenealogyTimeout, InvalidArgument
from ..models import Post
from .genealogists import Genealogist, TypedRelation
from .scores import check_score, round_half_up
from .weights import Weights

logger = logging.getLogger(__name__)

PairKey = tuple[str, str]


class Relation(BaseModel):
    """The aggregated score of one ordered pair of posts across all genealogists."""

    model_config = ConfigDict(frozen=True)

    post1: Post
    post2: Post
    score: int

    @model_validator(mode="after")
    def check_relation(self):
        if self.post1 == self.post2:
            raise InvalidArgument(f"A post can't be related to itself: {self.post1.slug}")
        check_score(self.score, repr(self))
        return self

    def __repr__(self) -> str:
        return f"Relation(post1={self.post1.slug}, post2={self.post2.slug}, score={self.score})"


def pair_key(relation: TypedRelation | Relation) -> PairKey:
    return relation.post1.slug, relation.post2.slug


def aggregate(typed_relations: Iterable[TypedRelation], weights: Weights) -> Relation:
    """Fold typed relations of one ordered pair into a single relation.

    Raises
    ------
    EmptyAggregation
        If *typed_relations* is empty.
    InvalidArgument
        If the typed relations don't all belong to the same ordered pair.
    InvalidScore
        If the weighted mean lies outside of [0; 100].
    """
    first: TypedRelation | None = None
    score_total = 0.0
    score_count = 0
    for relation in typed_relations:
        if first is None:
            first = relation
        elif pair_key(relation) != pair_key(first):
            raise InvalidArgument(
                f"All typed relations must belong to the same pair of posts: {first!r} vs {relation!r}"
            )
        score_total += relation.score * weights.weight_of(relation.type)
        score_count += 1

    if first is None:
        raise EmptyAggregation("Can't create relation from zero typed relations.")
    return Relation(
        post1=first.post1,
        post2=first.post2,
        score=round_half_up(score_total / score_count),
    )


class Genealogy:
    """Infers one relation per ordered pair of posts."""

    def __init__(
        self,
        posts: Sequence[Post],
        genealogists: Collection[Genealogist],
        weights: Weights,
        max_workers: int = 1,
        timeout: float | None = None,
    ):
        duplicates = sorted(slug for slug, count in Counter(post.slug for post in posts).items() if count > 1)
        if duplicates:
            raise InvalidArgument(f"Post slugs must be unique: {', '.join(duplicates)}")
        if max_workers < 1:
            raise InvalidArgument(f"Number of workers must be positive: {max_workers}")
        if timeout is not None and timeout <= 0:
            raise InvalidArgument(f"Timeout must be positive: {timeout}")

        self.posts = list(posts)
        self.genealogists = list(genealogists)
        self.weights = weights
        self.max_workers = max_workers
        self.timeout = timeout

    def infer_relations(self) -> list[Relation]:
        """Return one relation per ordered pair, in the order of the posts."""
        logger.info(
            "Inferring relations between %d posts with %d genealogists",
            len(self.posts),
            len(self.genealogists),
        )
        typed_relations = self.infer_typed_relations()
        relations = [
            aggregate(group, self.weights)
            for group in group_by_pair(typed_relations).values()
        ]
        logger.info("Aggregated %d typed relations into %d relations", len(typed_relations), len(relations))
        return relations

    def pairs(self) -> list[tuple[Post, Post]]:
        # no need to compare posts with themselves
        return [
            (post1, post2)
            for post1 in self.posts
            for post2 in self.posts
            if post1 != post2
        ]

    def infer_typed_relations(self) -> list[TypedRelation]:
        pairs = self.pairs()
        if self.max_workers == 1:
            return self._score_sequentially(pairs)
        return self._score_concurrently(pairs)

    def _score_pair(self, pair: tuple[Post, Post]) -> list[TypedRelation]:
        post1, post2 = pair
        return [genealogist.infer(post1, post2) for genealogist in self.genealogists]

    def _score_sequentially(self, pairs: list[tuple[Post, Post]]) -> list[TypedRelation]:
        deadline = None if self.timeout is None else time.monotonic() + self.timeout
        typed_relations: list[TypedRelation] = []
        for pair in pairs:
            if deadline is not None and time.monotonic() > deadline:
                raise self._timed_out(len(pairs))
            typed_relations.extend(self._score_pair(pair))
        return typed_relations

    def _score_concurrently(self, pairs: list[tuple[Post, Post]]) -> list[TypedRelation]:
        logger.debug("Scoring %d pairs on %d threads", len(pairs), self.max_workers)
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            # map() yields in submission order, so the result matches sequential scoring
            batches = executor.map(self._score_pair, pairs, timeout=self.timeout)
            return [relation for batch in batches for relation in batch]
        except concurrent.futures.TimeoutError as exc:
            raise self._timed_out(len(pairs)) from exc
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def _timed_out(self, pair_count: int) -> GenealogyTimeout:
        return GenealogyTimeout(f"Scoring {pair_count} pairs of posts took longer than {self.timeout}s")


def group_by_pair(typed_relations: Iterable[TypedRelation]) -> dict[PairKey, list[TypedRelation]]:
    """Partition typed relations by the slugs of their ordered pair, keeping first-seen order."""
    groups: dict[PairKey, list[TypedRelation]] = {}
    for relation in typed_relations:
        groups.setdefault(pair_key(relation), []).append(relation)
    return groups
