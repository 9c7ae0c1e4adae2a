"""Tests for on-disk git metadata lookup."""

from __future__ import annotations

from repomedic.utils.git import find_repository_root, remote_origin_url

_CONFIG = """[core]
\trepositoryformatversion = 0
\tbare = false
[remote "origin"]
\turl = git@example.com:org/repo.git
\tfetch = +refs/heads/*:refs/remotes/origin/*
[branch "main"]
\tremote = origin
"""


class TestFindRepositoryRoot:
    def test_walks_up(self, tmp_path):
        (tmp_path / ".git").mkdir()
        nested = tmp_path / "src" / "App"
        nested.mkdir(parents=True)
        assert find_repository_root(nested) == tmp_path.resolve()

    def test_git_file_counts(self, tmp_path):
        (tmp_path / ".git").write_text("gitdir: /elsewhere/.git/worktrees/wt\n")
        assert find_repository_root(tmp_path) == tmp_path.resolve()


class TestRemoteOriginUrl:
    def test_reads_origin(self, tmp_path):
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / "config").write_text(_CONFIG)
        assert remote_origin_url(tmp_path) == "git@example.com:org/repo.git"

    def test_no_origin(self, tmp_path):
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / "config").write_text("[core]\n\tbare = false\n")
        assert remote_origin_url(tmp_path) is None

    def test_no_config(self, tmp_path):
        (tmp_path / ".git").mkdir()
        assert remote_origin_url(tmp_path) is None

    def test_worktree_uses_main_config(self, tmp_path):
        main_git = tmp_path / "main" / ".git"
        (main_git / "worktrees" / "wt").mkdir(parents=True)
        (main_git / "config").write_text(_CONFIG)
        worktree = tmp_path / "wt"
        worktree.mkdir()
        (worktree / ".git").write_text(f"gitdir: {main_git / 'worktrees' / 'wt'}\n")
        assert remote_origin_url(worktree) == "git@example.com:org/repo.git"

    def test_submodule_gitdir(self, tmp_path):
        module_git = tmp_path / ".git" / "modules" / "sub"
        module_git.mkdir(parents=True)
        (module_git / "config").write_text('[remote "origin"]\n\turl = https://example.com/sub.git\n')
        sub = tmp_path / "sub"
        sub.mkdir()
        (sub / ".git").write_text("gitdir: ../.git/modules/sub\n")
        assert remote_origin_url(sub) == "https://example.com/sub.git"
