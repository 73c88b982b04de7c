"""Tests for the JSON rendering of recommendations."""

import json

import pytest

from ..errors import ConfigError
from .recommender import Recommendation
from .rendering import render_recommendations, write_recommendations


def test_renders_title_and_slug_of_post_and_recommendations(make_post):
    a = make_post("a", title="Streams")
    b = make_post("b", title="Records")
    c = make_post("c", title="Sealed classes")
    recommendations = [Recommendation(post=a, recommended_posts=(b, c))]

    assert json.loads(render_recommendations(recommendations)) == [
        {
            "title": "Streams",
            "slug": "a",
            "recommendations": [
                {"title": "Records", "slug": "b"},
                {"title": "Sealed classes", "slug": "c"},
            ],
        }
    ]


def test_output_is_indented(make_post):
    rendered = render_recommendations([Recommendation(post=make_post("a"), recommended_posts=(make_post("b"),))])
    assert rendered.startswith("[\n  {\n")


def test_no_recommendations_render_as_empty_array():
    assert json.loads(render_recommendations([])) == []


def test_quotes_in_titles_are_escaped(make_post):
    post = make_post("a", title='The "best" post')
    rendered = render_recommendations([Recommendation(post=post, recommended_posts=(make_post("b"),))])
    assert json.loads(rendered)[0]["title"] == 'The "best" post'


def test_write_to_stdout(capsys):
    write_recommendations("[]")
    assert capsys.readouterr().out == "[]\n"


def test_write_to_file(tmp_path, capsys):
    output = tmp_path / "recommendations.json"
    write_recommendations("[]", output)
    assert output.read_text(encoding="utf-8") == "[]\n"
    assert capsys.readouterr().out == ""


def test_write_failure_is_a_config_error(tmp_path):
    output = tmp_path / "missing" / "recommendations.json"
    with pytest.raises(ConfigError, match="Writing recommendations failed"):
        write_recommendations("[]", output)
