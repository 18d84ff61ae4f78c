"""Locate query sources and markdown notes given on the command line."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})


def collect_markdown_files(paths: Iterable[Path]) -> list[Path]:
    """Expand directories into the markdown files below them.

    Files named explicitly are kept whatever their suffix. Hidden
    directories (``.obsidian``, ``.git``) are skipped while walking.
    """
    files: list[Path] = []
    seen: set[Path] = set()
    for path in paths:
        if path.is_dir():
            candidates = sorted(
                p
                for p in path.rglob("*")
                if p.is_file()
                and p.suffix.lower() in MARKDOWN_SUFFIXES
                and not any(part.startswith(".") for part in p.relative_to(path).parts)
            )
        else:
            candidates = [path]
        for candidate in candidates:
            resolved = candidate.resolve()
            if resolved not in seen:
                seen.add(resolved)
                files.append(candidate)
    logger.debug("Collected %d markdown files", len(files))
    return files


def query_file_path(query_file: Path, base: Path | None = None) -> str:
    """Path of a query file as seen by placeholders, relative to ``base`` when possible."""
    base = base or Path.cwd()
    try:
        return query_file.resolve().relative_to(base.resolve()).as_posix()
    except ValueError:
        return query_file.as_posix()
