"""Tests for source line counting."""

from __future__ import annotations

from repomedic.engines.health_scanner.line_counter import (
    count_code_lines,
    count_file,
    count_lines_of_code,
    iter_source_files,
)


class TestCountCodeLines:
    def test_blank_and_line_comments(self):
        lines = ["using System;", "", "   ", "// note", "   // indented", "class A {}"]
        assert count_code_lines(lines) == 2

    def test_block_comment_spanning_lines(self):
        lines = ["/*", " * header", " */", "int x = 1;"]
        assert count_code_lines(lines) == 1

    def test_single_line_block_comment(self):
        assert count_code_lines(["/* one */", "int y;"]) == 1

    def test_code_before_block_comment_counts(self):
        lines = ["int z; /* start", "still comment", "end */", "int w;"]
        assert count_code_lines(lines) == 2

    def test_code_with_closed_inline_comment(self):
        assert count_code_lines(["int a; /* ok */", "int b;"]) == 2

    def test_line_comment_hides_block_opener(self):
        assert count_code_lines(["int a; // see /* this", "int b;"]) == 2

    def test_comment_markers_inside_strings_ignored(self):
        lines = ['var glob = "src/*.cs";'] + [f"int v{i};" for i in range(20)]
        assert count_code_lines(lines) == 21

    def test_url_and_char_literals(self):
        lines = [
            'var url = "http://example.com/api/*"; /* note',
            "still comment */",
            "char c = '/';",
            "int x;",
        ]
        assert count_code_lines(lines) == 3

    def test_escaped_quote_keeps_string_open(self):
        lines = [r'var s = "say \"/*\" now";', "int after;"]
        assert count_code_lines(lines) == 2

    def test_empty(self):
        assert count_code_lines([]) == 0


class TestProjectTotals:
    def test_three_files(self, tmp_path):
        (tmp_path / "Code.cs").write_text("\n".join(f"int v{i};" for i in range(10)))
        (tmp_path / "Blank.cs").write_text("\n" * 5)
        (tmp_path / "Comments.cs").write_text("// comment only\n" * 5)
        assert count_lines_of_code(tmp_path, max_workers=2) == 10

    def test_skips_build_output_and_generated(self, tmp_path):
        (tmp_path / "Real.cs").write_text("int a;\nint b;\n")
        for skipped in ("bin", "obj", ".vs"):
            (tmp_path / skipped).mkdir()
            (tmp_path / skipped / "Out.cs").write_text("int c;\n")
        (tmp_path / "Form.Designer.cs").write_text("int d;\n")
        (tmp_path / "Api.g.cs").write_text("int e;\n")
        (tmp_path / "notes.txt").write_text("int f;\n")
        files = [p.name for p in iter_source_files(tmp_path)]
        assert files == ["Real.cs"]
        assert count_lines_of_code(tmp_path) == 2

    def test_nested_directories(self, tmp_path):
        (tmp_path / "Services").mkdir()
        (tmp_path / "Services" / "Svc.cs").write_text("class Svc {}\n")
        (tmp_path / "Program.cs").write_text("class Program {}\n")
        assert count_lines_of_code(tmp_path) == 2

    def test_no_sources(self, tmp_path):
        assert count_lines_of_code(tmp_path) == 0

    def test_unreadable_file_counts_zero(self, tmp_path):
        assert count_file(tmp_path / "missing.cs") == 0
