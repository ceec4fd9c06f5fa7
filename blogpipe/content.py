from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Iterable, Optional

import yaml

from .errors import DuplicateSlugError, FrontMatterError, NotFoundError

logger = logging.getLogger(__name__)

POST_FIELDS = (
    "slug",
    "title",
    "date",
    "author",
    "categories",
    "tags",
    "content",
    "excerpt",
    "coverImage",
    "ogImage",
    "metaDescription",
    "metaKeywords",
)
LIST_FIELDS = {"categories", "tags"}
TEXT_FIELDS = {"title", "author", "excerpt", "metaDescription", "metaKeywords"}
POST_SUFFIX = ".md"


def parse_list(value: str) -> list[str]:
    value = value.strip()
    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1]
        items = [item.strip().strip("'\"") for item in inner.split(",")]
    else:
        items = [item.strip() for item in value.split(",")]
    return [item for item in items if item]


def parse_front_matter(text: str, source: object = "<string>") -> tuple[dict, str]:
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, clean_text

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end = i
            break
    if end is None:
        raise FrontMatterError(source, "missing closing '---'")

    block = "\n".join(lines[1:end])
    try:
        meta = yaml.safe_load(block)
    except (yaml.YAMLError, ValueError) as exc:
        # PyYAML raises a bare ValueError for impossible dates such as 2022-02-30.
        raise FrontMatterError(source, str(exc)) from exc
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise FrontMatterError(source, "metadata block must be a mapping")
    body = "\n".join(lines[end + 1 :])
    return meta, body


def _coerce(key: str, value: object, source: object) -> object:
    if key == "date":
        if isinstance(value, (dt.date, dt.datetime)):
            return value.isoformat()
        return str(value)
    if key in LIST_FIELDS:
        if isinstance(value, str):
            return parse_list(value)
        if isinstance(value, list):
            return [str(item).strip() for item in value if item is not None and str(item).strip()]
        raise FrontMatterError(source, f"'{key}' must be a list or a comma separated string")
    if key in TEXT_FIELDS:
        return str(value)
    return value


def _check_fields(fields: Optional[Iterable[str]]) -> tuple[str, ...]:
    if fields is None:
        return POST_FIELDS
    fields = tuple(fields)
    unknown = [name for name in fields if name not in POST_FIELDS]
    if unknown:
        raise ValueError(f"Unknown post field(s): {', '.join(unknown)}")
    return fields


def load_post(path: Path, fields: Optional[Iterable[str]] = None) -> dict:
    """Parse one markdown file into a post record.

    Only the requested fields are returned. ``slug`` and ``content`` always
    resolve; any other field missing from the front-matter (or set to null)
    is left out of the record rather than defaulted.
    """
    wanted = _check_fields(fields)
    path = Path(path)
    raw_text = path.read_text(encoding="utf-8")
    meta, body = parse_front_matter(raw_text, path)

    post = {}
    for key in wanted:
        if key == "slug":
            post["slug"] = path.stem
        elif key == "content":
            post["content"] = body
        elif meta.get(key) is not None:
            post[key] = _coerce(key, meta[key], path)
    logger.debug("Loaded %s (%d fields)", path, len(post))
    return post


def post_files(content_dir: Path) -> dict[str, Path]:
    content_dir = Path(content_dir)
    if not content_dir.is_dir():
        raise NotFoundError(f"Content directory not found: {content_dir}")
    files: dict[str, Path] = {}
    for path in sorted(content_dir.rglob(f"*{POST_SUFFIX}"), key=lambda p: p.as_posix()):
        if not path.is_file():
            continue
        slug = path.stem
        if slug in files:
            raise DuplicateSlugError(slug, files[slug], path)
        files[slug] = path
    return files


def get_post_by_slug(content_dir: Path, slug: str, fields: Optional[Iterable[str]] = None) -> dict:
    path = post_files(content_dir).get(slug)
    if path is None:
        raise NotFoundError(f"No post with slug '{slug}' in {content_dir}")
    return load_post(path, fields)


def get_all_posts(content_dir: Path, fields: Optional[Iterable[str]] = None) -> list[dict]:
    wanted = _check_fields(fields)
    files = post_files(content_dir)
    posts = [load_post(path, wanted) for path in files.values()]
    logger.info("Loaded %d posts from %s", len(posts), content_dir)
    return posts


def sort_posts(posts: list[dict]) -> list[dict]:
    """Newest first; posts without a date go last, keeping their input order."""
    dated = [post for post in posts if post.get("date")]
    undated = [post for post in posts if not post.get("date")]
    return sorted(dated, key=lambda p: p["date"], reverse=True) + undated


def make_excerpt(post: dict, max_words: int = 50) -> str:
    if post.get("excerpt"):
        return post["excerpt"]
    text = (post.get("content") or "").strip()
    words = text.split()
    if max_words >= 0 and len(words) > max_words:
        return " ".join(words[:max_words]) + "..."
    return " ".join(words)
