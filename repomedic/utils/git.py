"""Git helpers that read repository metadata straight from disk."""

from __future__ import annotations

import configparser
from pathlib import Path


def find_repository_root(path: Path) -> Path | None:
    """Walk up from *path* to the first directory holding ``.git`` (dir or file)."""
    current = path.resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def _config_path(repo_root: Path) -> Path | None:
    git_entry = repo_root / ".git"
    if git_entry.is_dir():
        return git_entry / "config"
    if not git_entry.is_file():
        return None

    # Worktree: ".git" is a file pointing at <main>/.git/worktrees/<name>
    content = git_entry.read_text(encoding="utf-8").strip()
    if not content.lower().startswith("gitdir:"):
        return None
    gitdir = Path(content[len("gitdir:") :].strip())
    if not gitdir.is_absolute():
        gitdir = (repo_root / gitdir).resolve()
    if gitdir.parent.name == "worktrees":
        return gitdir.parent.parent / "config"
    return gitdir / "config"


def remote_origin_url(repo_root: Path) -> str | None:
    """The ``origin`` remote URL from the repository config, if any."""
    try:
        config_path = _config_path(repo_root)
        if config_path is None or not config_path.is_file():
            return None
        parser = configparser.ConfigParser(strict=False, interpolation=None)
        parser.read(config_path, encoding="utf-8")
    except (OSError, configparser.Error):
        return None
    section = 'remote "origin"'
    if not parser.has_section(section):
        return None
    return parser.get(section, "url", fallback=None)
