from __future__ import annotations

from pathlib import Path
from typing import Optional


class PipelineError(Exception):
    """Base class for every error that aborts a build step."""


class ConfigError(PipelineError):
    pass


class NotFoundError(PipelineError):
    pass


class FrontMatterError(PipelineError):
    def __init__(self, source: object, reason: str):
        self.source = str(source)
        self.reason = reason
        super().__init__(f"Invalid front-matter in {self.source}: {reason}")


class DuplicateSlugError(PipelineError):
    def __init__(self, slug: str, first: Path, second: Path):
        self.slug = slug
        self.paths = (first, second)
        super().__init__(f"Duplicate slug '{slug}': {first} and {second}")


class OutputWriteError(PipelineError):
    what = "output"

    def __init__(self, path: Path, cause: Optional[BaseException] = None):
        self.path = path
        message = f"Could not write {self.what} to {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class SitemapWriteError(OutputWriteError):
    what = "sitemap"
