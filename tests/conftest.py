from pathlib import Path

import pytest


def write_post(content_dir: Path, name: str, text: str) -> Path:
    path = content_dir / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path):
    """Three posts mirroring a small real blog: two Sitecore posts and one untagged note."""
    root = tmp_path / "posts"
    root.mkdir()
    write_post(
        root,
        "hello-sitecore.md",
        "---\n"
        "title: Hello Sitecore\n"
        "date: 2022-03-01\n"
        "author: Kyle\n"
        "categories: [Sitecore, CMS]\n"
        "tags: [JSS, Next]\n"
        "metaDescription: First steps\n"
        "---\n"
        "# Hello\n\nSome words about Sitecore.\n",
    )
    write_post(
        root,
        "jss-tips.md",
        "---\n"
        "title: JSS tips\n"
        "date: 2022-05-10T08:30:00\n"
        "categories:\n"
        "  - sitecore\n"
        "tags: jss, Headless\n"
        "excerpt: Short tips.\n"
        "---\n"
        "Tips body.\n",
    )
    write_post(
        root,
        "notes.md",
        "---\n"
        "title: Notes\n"
        "date: 2021-12-24\n"
        "---\n"
        "Plain notes without categories.\n",
    )
    return root
