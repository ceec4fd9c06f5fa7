from __future__ import annotations

import logging
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

INDEX_FIELDS = ("categories", "tags")


def normalize(name: str) -> str:
    return name.strip().lower()


def _names(post: dict, field: str) -> list[str]:
    values = post.get(field) or []
    return [normalize(value) for value in values if value is not None and normalize(value)]


def _distinct(posts: Iterable[dict], field: str) -> list[str]:
    names = set()
    for post in posts:
        names.update(_names(post, field))
    return sorted(names)


def distinct_categories(posts: Iterable[dict]) -> list[str]:
    return _distinct(posts, "categories")


def distinct_tags(posts: Iterable[dict]) -> list[str]:
    return _distinct(posts, "tags")


def _filter(posts: Iterable[dict], field: str, name: Optional[str]) -> list[dict]:
    if name is None or not normalize(name):
        return []
    target = normalize(name)
    return [post for post in posts if target in _names(post, field)]


def posts_by_category(posts: Iterable[dict], category: Optional[str]) -> list[dict]:
    return _filter(posts, "categories", category)


def posts_by_tag(posts: Iterable[dict], tag: Optional[str]) -> list[dict]:
    return _filter(posts, "tags", tag)


def build_index(posts: Iterable[dict], field: str) -> dict[str, list[dict]]:
    """Map each normalized category or tag to the posts that reference it.

    Keys are sorted alphabetically; each listing keeps the input post order
    and holds a post once even if it names the same value twice.
    """
    if field not in INDEX_FIELDS:
        raise ValueError(f"Cannot index posts by '{field}'")
    posts = list(posts)
    index: dict[str, list[dict]] = {}
    for name in _distinct(posts, field):
        index[name] = []
    for post in posts:
        for name in dict.fromkeys(_names(post, field)):
            index[name].append(post)
    logger.debug("Indexed %d %s", len(index), field)
    return index
