from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional

import markdown
from pygments.formatters import HtmlFormatter

CODE_CSS_CLASS = "codehilite"
MARKDOWN_EXTENSIONS = ["fenced_code", "codehilite", "tables"]
MARKDOWN_EXTENSION_CONFIGS = {
    "codehilite": {"css_class": CODE_CSS_CLASS, "guess_lang": False},
}


def markdown_to_html(text: Optional[str]) -> str:
    """Render a markdown body to HTML.

    Fenced code blocks with a language are highlighted by Pygments. Raw HTML
    in the source is passed through as-is, so the result must only be built
    from content the site owner wrote.
    """
    if not text or not text.strip():
        return ""
    md = markdown.Markdown(
        extensions=MARKDOWN_EXTENSIONS,
        extension_configs=MARKDOWN_EXTENSION_CONFIGS,
    )
    html_content = md.convert(text)
    md.reset()
    return html_content


def highlight_css(style: str = "default") -> str:
    formatter = HtmlFormatter(style=style, cssclass=CODE_CSS_CLASS)
    return formatter.get_style_defs(f".{CODE_CSS_CLASS}")


def write_text(path: Path, text: str) -> None:
    # Temp file in the target directory, then an atomic swap.
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
