"""End-to-end tests for the command line entry point."""

import builtins

import pytest

from main import main

from .conftest import write


def run(*argv):
    return main(list(argv))


def test_no_command_prints_help(capsys):
    assert run() == 1
    assert "usage:" in capsys.readouterr().out


class TestLint:
    def test_clean_repository_passes(self, notes_root, capsys):
        assert run("lint", "--root", str(notes_root), "--no-progress") == 0
        assert "✅ 검사를 통과했습니다." in capsys.readouterr().out

    def test_broken_link_fails(self, notes_root, capsys):
        write(notes_root, "PHP/README.md", "# PHP\n\n[gone](./Gone.md)\n")

        assert run("lint", "--root", str(notes_root), "--no-progress") == 1
        out = capsys.readouterr().out
        assert "[broken-file-link]" in out
        assert "❌ 검사에 실패했습니다." in out

    def test_disable_rule(self, notes_root):
        write(notes_root, "PHP/README.md", "# PHP\n\n[gone](./Gone.md)\n")
        argv = ["lint", "--root", str(notes_root), "--no-progress"]
        assert run(*argv, "--disable", "broken-file-link") == 0

    def test_strict_fails_on_warning(self, notes_root):
        write(notes_root, "PHP/README.md", "# PHP\n\n```\nx\n```\n")
        argv = ["lint", "--root", str(notes_root), "--no-progress"]
        assert run(*argv) == 0
        assert run(*argv, "--strict") == 1

    def test_unknown_rule_is_rejected(self, notes_root):
        with pytest.raises(SystemExit):
            run("lint", "--root", str(notes_root), "--disable", "no-such-rule")

    def test_missing_root(self, tmp_path):
        assert run("lint", "--root", str(tmp_path / "missing"), "--no-progress") == 1


class TestToc:
    def test_print_toc(self, notes_root, capsys):
        path = notes_root / "Laravel" / "Interview_Questions.md"
        assert run("toc", str(path)) == 0
        assert "  - [Example](#example)" in capsys.readouterr().out

    def test_write_updates_region(self, tmp_path):
        path = write(
            tmp_path,
            "Notes.md",
            "# Notes\n\n<!-- toc -->\n<!-- tocstop -->\n\n## First\n\nText.\n",
        )

        assert run("toc", str(path), "--write") == 0
        assert "- [First](#first)" in path.read_text(encoding="utf-8")

        before = path.read_text(encoding="utf-8")
        assert run("toc", str(path), "--write") == 0
        assert path.read_text(encoding="utf-8") == before

    def test_missing_file(self, tmp_path):
        assert run("toc", str(tmp_path / "nope.md")) == 1


def test_links(notes_root, capsys):
    path = notes_root / "Laravel" / "README.md"
    assert run("links", "--root", str(notes_root), str(path)) == 0
    assert "./Interview_Questions.md#what-is-middleware" in capsys.readouterr().out


def test_questions(notes_root, capsys):
    assert run("questions", "--root", str(notes_root), "--no-progress", "--topic", "PHP", "-v") == 0
    out = capsys.readouterr().out
    assert "❓ What is a closure?" in out
    assert "총 1개 질문 항목" in out


class TestSearch:
    def test_search(self, notes_root, capsys):
        argv = ["search", "middleware", "--root", str(notes_root), "--no-progress"]
        assert run(*argv, "--detailed-scores") == 0
        out = capsys.readouterr().out
        assert "검색 결과 (2개)" in out
        assert "What is middleware?" in out

    def test_hierarchy_filter(self, notes_root, capsys):
        argv = ["search", "ucfirst", "--root", str(notes_root), "--no-progress"]
        assert run(*argv, "--hierarchy-filter", '{"level": 2, "title": "Accessors & Mutators"}') == 0
        assert "결과 1: Example" in capsys.readouterr().out

    def test_bad_hierarchy_filter(self, notes_root):
        argv = ["search", "x", "--root", str(notes_root), "--no-progress"]
        assert run(*argv, "--hierarchy-filter", "{not json") == 1

    def test_no_results(self, notes_root, capsys):
        argv = ["search", "kubernetes", "--root", str(notes_root), "--no-progress"]
        assert run(*argv) == 0
        assert "검색 결과가 없습니다." in capsys.readouterr().out


def test_stats(notes_root, capsys):
    assert run("stats", "--root", str(notes_root), "--no-progress") == 0
    out = capsys.readouterr().out
    assert "질문 항목: 5개" in out
    assert "Laravel: 파일 1개, README 있음" in out


def test_config(capsys):
    assert run("config") == 0
    assert "dangling-anchor (error)" in capsys.readouterr().out


def test_invalid_config(monkeypatch, capsys):
    monkeypatch.setattr("notelint.core.config.Config.TITLE_WEIGHT", 0.9)
    assert run("config") == 1
    assert "설정 오류" in capsys.readouterr().out


def test_interactive_mode(notes_root, monkeypatch, capsys):
    answers = iter(["!stats", "미들웨어", "quit"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))

    assert run("interactive", "--root", str(notes_root), "--no-progress") == 0
    out = capsys.readouterr().out
    assert "총 질문 항목 수: 5" in out
    assert "1개의 결과를 찾았습니다." in out


def test_interactive_search_type(notes_root, monkeypatch, capsys):
    answers = iter(["!type keyword", "ucfirst", "!type bogus", "!nope", "exit"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))

    assert run("interactive", "--root", str(notes_root), "--no-progress") == 0
    out = capsys.readouterr().out
    assert "🔧 검색 타입: keyword" in out
    assert "결과 1: Example" in out
    assert "검색 타입은 title, keyword, hybrid 중 하나입니다." in out
    assert "알 수 없는 명령어" in out
