"""Count non-blank, non-comment source lines under a project directory."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

SOURCE_SUFFIX = ".cs"

# Build output and IDE state never hold hand-written sources.
_SKIP_DIRS = {"bin", "obj", ".vs", ".git", "node_modules"}
_GENERATED_SUFFIXES = (".g.cs", ".g.i.cs", ".designer.cs", ".generated.cs")


def _is_generated(name: str) -> bool:
    return name.lower().endswith(_GENERATED_SUFFIXES)


def iter_source_files(project_dir: Path) -> Iterator[Path]:
    """Yield countable source files below *project_dir*."""
    for dirpath, dirnames, filenames in os.walk(project_dir):
        dirnames[:] = sorted(
            d for d in dirnames if d.lower() not in _SKIP_DIRS and not d.startswith(".")
        )
        for name in sorted(filenames):
            if not name.endswith(SOURCE_SUFFIX) or name.startswith("."):
                continue
            if _is_generated(name):
                continue
            yield Path(dirpath) / name


def _comment_start(line: str) -> tuple[str, int] | None:
    """First comment marker outside string and char literals, as (marker, index)."""
    quote = None
    i = 0
    while i < len(line) - 1:
        ch = line[i]
        if quote is not None:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == "/" and line[i + 1] in "/*":
            return line[i : i + 2], i
        i += 1
    return None


def count_code_lines(lines: Iterable[str]) -> int:
    """Count lines that carry code.

    Blank lines, ``//`` comment lines and ``/* ... */`` regions are skipped.
    A line that opens a block comment after real code counts as code;
    markers inside string and char literals are ignored.
    """
    count = 0
    in_block = False
    for line in lines:
        stripped = line.strip()
        if in_block:
            if "*/" in stripped:
                in_block = False
            continue
        if not stripped or stripped.startswith("//"):
            continue
        if stripped.startswith("/*"):
            in_block = "*/" not in stripped[2:]
            continue
        count += 1
        marker = _comment_start(stripped)
        if marker is not None and marker[0] == "/*":
            in_block = "*/" not in stripped[marker[1] + 2 :]
    return count


def count_file(path: Path) -> int:
    """Code lines in *path*; unreadable files count as zero."""
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return count_code_lines(f)
    except OSError:
        return 0


def count_lines_of_code(project_dir: Path, *, max_workers: int | None = None) -> int:
    """Total code lines across all source files under *project_dir*.

    Files are read concurrently; per-file totals are summed, so ordering
    between files is irrelevant.
    """
    files = list(iter_source_files(project_dir))
    if not files:
        return 0
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return sum(pool.map(count_file, files))
