import datetime

import pytest

from .models import Article, Talk, Video


@pytest.fixture
def make_post():
    """Factory for posts that only differ in the fields a test cares about."""

    def _make(slug: str, kind: str = "article", **fields):
        fields.setdefault("title", "Title")
        fields.setdefault("tags", frozenset({"tag"}))
        fields.setdefault("date", datetime.date(2020, 1, 23))
        fields.setdefault("description", "description")
        if kind == "talk":
            fields.setdefault("slides", "https://slides.example/talk")
            return Talk(slug=slug, **fields)
        if kind == "video":
            fields.setdefault("video", "dQw4w9WgXcQ")
            return Video(slug=slug, **fields)
        return Article(slug=slug, **fields)

    return _make
