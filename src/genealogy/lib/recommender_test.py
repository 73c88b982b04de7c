"""Tests for ranking relations into recommendations."""

import pytest

from ..errors import InvalidArgument
from .genealogy import Relation
from .recommender import Recommendation, Recommender


@pytest.fixture
def recommender():
    return Recommender()


@pytest.fixture
def posts(make_post):
    return {slug: make_post(slug) for slug in ("a", "b", "c", "d")}


@pytest.fixture
def relation(posts):
    def _relation(slug1: str, slug2: str, score: int) -> Relation:
        return Relation(post1=posts[slug1], post2=posts[slug2], score=score)

    return _relation


@pytest.fixture
def all_relations(relation):
    return [
        relation("a", "b", 60),
        relation("a", "c", 40),
        relation("b", "a", 50),
        relation("b", "c", 70),
        relation("c", "a", 80),
        relation("c", "b", 60),
    ]


class TestRecommender:
    def test_one_post_one_relation(self, recommender, relation, posts):
        recommendations = recommender.recommend([relation("a", "c", 40)], 1)
        assert recommendations == [Recommendation(post=posts["a"], recommended_posts=(posts["c"],))]

    def test_one_post_two_relations(self, recommender, relation, posts):
        recommendations = recommender.recommend([relation("a", "b", 60), relation("a", "c", 40)], 1)
        assert recommendations == [Recommendation(post=posts["a"], recommended_posts=(posts["b"],))]

    def test_many_posts_one_relation_each(self, recommender, relation, posts):
        recommendations = recommender.recommend(
            [relation("a", "c", 40), relation("b", "c", 70), relation("c", "b", 60)], 1
        )
        assert recommendations == [
            Recommendation(post=posts["a"], recommended_posts=(posts["c"],)),
            Recommendation(post=posts["b"], recommended_posts=(posts["c"],)),
            Recommendation(post=posts["c"], recommended_posts=(posts["b"],)),
        ]

    def test_many_posts_two_relations_each(self, recommender, all_relations, posts):
        recommendations = recommender.recommend(all_relations, 1)
        assert recommendations == [
            Recommendation(post=posts["a"], recommended_posts=(posts["b"],)),
            Recommendation(post=posts["b"], recommended_posts=(posts["c"],)),
            Recommendation(post=posts["c"], recommended_posts=(posts["a"],)),
        ]

    def test_recommendations_are_sorted_by_decreasing_score(self, recommender, all_relations, posts):
        recommendations = recommender.recommend(all_relations, 2)
        assert [[p.slug for p in r.recommended_posts] for r in recommendations] == [
            ["b", "c"],
            ["c", "a"],
            ["a", "b"],
        ]

    def test_ties_are_broken_by_destination_slug(self, recommender, relation):
        relations = [relation("a", "d", 50), relation("a", "c", 50), relation("a", "b", 50)]
        for ordering in (relations, list(reversed(relations))):
            (recommendation,) = recommender.recommend(ordering, 2)
            assert [p.slug for p in recommendation.recommended_posts] == ["b", "c"]

    @pytest.mark.parametrize("per_post", [1, 2, 3, 10])
    def test_never_more_than_k_and_never_the_post_itself(self, recommender, all_relations, per_post):
        for recommendation in recommender.recommend(all_relations, per_post):
            assert len(recommendation.recommended_posts) <= per_post
            assert recommendation.post not in recommendation.recommended_posts

    def test_posts_without_outgoing_relations_get_no_recommendation(self, recommender, relation):
        recommendations = recommender.recommend([relation("a", "d", 10)], 3)
        assert [r.post.slug for r in recommendations] == ["a"]

    def test_no_relations_no_recommendations(self, recommender):
        assert recommender.recommend([], 3) == []

    @pytest.mark.parametrize("per_post", [0, -1])
    def test_non_positive_k_is_rejected(self, recommender, all_relations, per_post):
        with pytest.raises(InvalidArgument, match="K must be positive"):
            recommender.recommend(all_relations, per_post)


def test_recommendation_of_itself_is_rejected(posts):
    with pytest.raises(InvalidArgument):
        Recommendation(post=posts["a"], recommended_posts=(posts["b"], posts["a"]))
