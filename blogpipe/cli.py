from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Sequence

from .config import load_config
from .content import get_all_posts, make_excerpt, sort_posts
from .errors import OutputWriteError, PipelineError
from .index import build_index
from .readtime import WORDS_PER_MINUTE, read_time
from .render import highlight_css, markdown_to_html, write_text
from .sitemap import write_sitemap
from .utils import parse_bool, parse_int

logger = logging.getLogger(__name__)

EXCERPT_WORDS = 50
CONTENT_INDEX = "content.json"
HIGHLIGHT_CSS = "codehilite.css"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def render_post(post: dict, words_per_minute: int, excerpt_words: int) -> dict:
    rendered = dict(post)
    rendered["html"] = markdown_to_html(post.get("content"))
    rendered["readTime"] = read_time(post.get("content"), words_per_minute)
    rendered["excerpt"] = make_excerpt(post, excerpt_words)
    return rendered


def render_posts(posts: list[dict], args: argparse.Namespace) -> list[dict]:
    workers = args.build_workers
    if workers <= 0:
        workers = os.cpu_count() or 1
    workers = max(1, min(workers, 32, len(posts) or 1))

    def render(post: dict) -> dict:
        return render_post(post, args.words_per_minute, args.excerpt_words)

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(render, posts))
    return [render(post) for post in posts]


def build_content_index(posts: list[dict]) -> dict:
    categories = build_index(posts, "categories")
    tags = build_index(posts, "tags")
    return {
        "posts": posts,
        "categories": {name: [post["slug"] for post in items] for name, items in categories.items()},
        "tags": {name: [post["slug"] for post in items] for name, items in tags.items()},
    }


def write_output(path: Path, text: str) -> None:
    try:
        write_text(path, text)
    except OSError as exc:
        raise OutputWriteError(path, exc) from exc


def build_site(args: argparse.Namespace) -> dict:
    content_dir = Path(args.content)
    output_dir = Path(args.output)

    posts = sort_posts(get_all_posts(content_dir))
    rendered = render_posts(posts, args)
    data = build_content_index(rendered)
    logger.info(
        "Indexed %d categories and %d tags", len(data["categories"]), len(data["tags"])
    )

    write_output(output_dir / CONTENT_INDEX, json.dumps(data, indent=2, ensure_ascii=False, default=str))
    write_output(output_dir / HIGHLIGHT_CSS, highlight_css(args.highlight_style))

    site_url = (args.site_url or "").strip()
    if args.enable_sitemap:
        if site_url:
            sitemap_path = Path(args.sitemap) if args.sitemap else output_dir / "sitemap.xml"
            write_sitemap(posts, site_url, sitemap_path)
        else:
            logger.warning("No site URL configured, skipping sitemap.")
    return data


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    config = load_config(Path(pre_args.config))

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: str) -> str:
        return str(cfg_value(key, default))

    def cfg_bool(key: str, default: bool) -> bool:
        return parse_bool(cfg_value(key, default))

    def cfg_int(key: str, default: int) -> int:
        return parse_int(cfg_value(key, default), default)

    parser = argparse.ArgumentParser(description="Build blog content, indexes and sitemap from Markdown posts.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--content", default=cfg_str("content", "posts"), help="Directory containing Markdown posts.")
    parser.add_argument("--output", default=cfg_str("output", "public"), help="Output directory for build artifacts.")
    parser.add_argument(
        "--site-url",
        default=cfg_str("site_url", ""),
        help="Public site URL used for the sitemap.",
    )
    parser.add_argument(
        "--sitemap",
        default=cfg_str("sitemap", ""),
        help="Sitemap output path (default: <output>/sitemap.xml).",
    )
    parser.add_argument(
        "--enable-sitemap",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("enable_sitemap", True),
        help="Generate sitemap.xml.",
    )
    parser.add_argument(
        "--words-per-minute",
        default=cfg_int("words_per_minute", WORDS_PER_MINUTE),
        type=int,
        help="Reading speed used for read-time estimates.",
    )
    parser.add_argument(
        "--excerpt-words",
        default=cfg_int("excerpt_words", EXCERPT_WORDS),
        type=int,
        help="Words kept when deriving an excerpt from the post body.",
    )
    parser.add_argument(
        "--build-workers",
        default=cfg_int("build_workers", 1),
        type=int,
        help="Number of worker threads for rendering (0 = auto).",
    )
    parser.add_argument(
        "--highlight-style",
        default=cfg_str("highlight_style", "default"),
        help="Pygments style for code highlighting.",
    )
    parser.add_argument(
        "--log-level",
        default=cfg_str("log_level", "WARNING"),
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )
    args = parser.parse_args(argv)
    if args.words_per_minute <= 0:
        parser.error("--words-per-minute must be positive")
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    try:
        args = parse_args(argv)
    except PipelineError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)
    logging.basicConfig(
        level=args.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    start = time.perf_counter()
    try:
        data = build_site(args)
    except PipelineError as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    print(f"{len(data['posts'])} posts written to: {args.output}")
