"""Loading posts from Markdown files with front matter.

A post file starts with a front matter block framed by two ``---`` lines.
Every line in between is a ``key: value`` pair, split at the first colon::

    ---
    title: Cool: A blog post
    tags: [java, streams]
    date: 2020-01-23
    description: "Very blog, much post, so wow"
    slug: cool-blog-post
    ---
    The content starts here.

A post folder holds articles directly or in ``articles/``, talks in
``talks/`` and videos in ``videos/``.
"""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from pydantic import ValidationError

from ..errors import PostParseError
from ..models import Article, Post, Talk, Video

logger = logging.getLogger(__name__)

FRONT_MATTER_SEPARATOR = "---"

# Front matter keys
DATE = "date"
DESCRIPTION = "description"
REPOSITORY = "repo"
SLIDES = "slides"
SLUG = "slug"
TAGS = "tags"
TITLE = "title"
VIDEO = "videoSlug"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _key_value_pair(line: str) -> tuple[str, str]:
    key, colon, value = line.partition(":")
    if not colon:
        raise PostParseError(f"Line doesn't seem to be a key/value pair (no colon): {line}")
    key = key.strip()
    if not key:
        raise PostParseError(f'Line "{line}" has no key.')
    return key, value.strip()


def read_front_matter(lines: Sequence[str]) -> dict[str, str]:
    """Return the key/value pairs between the first two separator lines."""
    front_matter: dict[str, str] = {}
    started = False
    for line in lines:
        if line.strip() == FRONT_MATTER_SEPARATOR:
            if started:
                break
            started = True
        elif started:
            key, value = _key_value_pair(line)
            front_matter[key] = value
    return front_matter


def extract_content(lines: Sequence[str]) -> list[str]:
    """Return the lines after the front matter block."""
    separators = 0
    for index, line in enumerate(lines):
        if line.strip() == FRONT_MATTER_SEPARATOR:
            separators += 1
            if separators == 2:
                return list(lines[index + 1:])
    return []


def parse_tags(text: str) -> frozenset[str]:
    """Parse ``[a, b, c]`` into a set of tags, dropping blank and duplicate ones."""
    text = text.strip()
    if text.startswith("["):
        text = text[1:]
    if text.endswith("]"):
        text = text[:-1]
    return frozenset(tag.strip() for tag in text.split(",") if tag.strip())


def _required(front_matter: dict[str, str], key: str) -> str:
    try:
        return front_matter[key]
    except KeyError:
        raise PostParseError(f"Required key '{key}' not present in front matter.") from None


def _common_fields(front_matter: dict[str, str]) -> dict:
    return {
        "title": _required(front_matter, TITLE),
        "tags": parse_tags(_required(front_matter, TAGS)),
        "date": _required(front_matter, DATE),
        "description": _required(front_matter, DESCRIPTION),
        "slug": _required(front_matter, SLUG),
    }


def _validated(kind: type[Post], fields: dict) -> Post:
    try:
        return kind(**fields)
    except ValidationError as exc:
        raise PostParseError(f"Invalid {kind.__name__.lower()}: {exc}") from exc


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def create_article(lines: Sequence[str]) -> Article:
    front_matter = read_front_matter(lines)
    return _validated(Article, {
        **_common_fields(front_matter),
        "repository": front_matter.get(REPOSITORY),
        "content": tuple(extract_content(lines)),
    })


def create_talk(lines: Sequence[str]) -> Talk:
    front_matter = read_front_matter(lines)
    return _validated(Talk, {
        **_common_fields(front_matter),
        "slides": _required(front_matter, SLIDES),
        "video": front_matter.get(VIDEO),
    })


def create_video(lines: Sequence[str]) -> Video:
    front_matter = read_front_matter(lines)
    return _validated(Video, {
        **_common_fields(front_matter),
        "video": _required(front_matter, VIDEO),
        "repository": front_matter.get(REPOSITORY),
    })


PostFactory = Callable[[Sequence[str]], Post]

# Subfolder of the post folder -> factory for the files in it
FOLDER_FACTORIES: dict[str, PostFactory] = {
    "articles": create_article,
    "talks": create_talk,
    "videos": create_video,
}


# ---------------------------------------------------------------------------
# Files and folders
# ---------------------------------------------------------------------------

def load_post(file: Path, factory: PostFactory = create_article) -> Post:
    """Create a post from *file*; errors name the file."""
    try:
        lines = file.read_text(encoding="utf-8").splitlines()
        return factory(lines)
    except (OSError, UnicodeDecodeError, PostParseError) as exc:
        raise PostParseError(f"Creating post failed: {file}: {exc}") from exc


def _markdown_files(folder: Path) -> list[Path]:
    return sorted(path for path in folder.glob("*.md") if path.is_file())


def load_posts(folder: Path) -> list[Post]:
    """Load every post below *folder*, in a stable order."""
    folder = Path(folder)
    posts: list[Post] = [load_post(file) for file in _markdown_files(folder)]
    for subfolder, factory in FOLDER_FACTORIES.items():
        path = folder / subfolder
        if path.is_dir():
            posts.extend(load_post(file, factory) for file in _markdown_files(path))

    logger.info("Loaded %d posts from %s", len(posts), folder)
    return posts
