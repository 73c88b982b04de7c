"""Tests for relation-type weights."""

import pytest

from ..errors import InvalidArgument
from .genealogists import RelationType
from .weights import Weights


class TestWeights:
    def test_mapped_type_gets_its_weight(self):
        weights = Weights({RelationType("tag"): 0.75}, 0.5)
        assert weights.weight_of(RelationType("tag")) == 0.75

    def test_unmapped_type_gets_default_weight(self):
        weights = Weights({"tag": 0.75}, 0.5)
        assert weights.weight_of(RelationType("repo")) == 0.5
        assert weights.default_weight == 0.5

    def test_plain_strings_work_as_keys_and_lookups(self):
        weights = Weights({"tag": 2}, 1.0)
        assert weights.weight_of("tag") == 2.0

    def test_all_equal(self):
        weights = Weights.all_equal()
        assert weights.weight_of("anything") == 1.0

    def test_missing_weight_is_rejected(self):
        with pytest.raises(InvalidArgument):
            Weights({"tag": None}, 1.0)

    def test_missing_relation_type_is_rejected(self):
        with pytest.raises(InvalidArgument):
            Weights({None: 1.0}, 1.0)

    def test_non_numeric_weight_is_rejected(self):
        with pytest.raises(InvalidArgument):
            Weights({"tag": "heavy"}, 1.0)

    def test_later_changes_to_the_source_mapping_are_ignored(self):
        source = {"tag": 0.5}
        weights = Weights(source, 1.0)
        source["tag"] = 2.0
        assert weights.weight_of("tag") == 0.5

