"""Tests for repository discovery, question extraction and TOC extraction."""

from pathlib import Path

import pytest

from notelint.core.repository import NotesRepository

from .conftest import write


def relative_names(repository, paths):
    return [repository.relative(p) for p in paths]


class TestDiscovery:
    def test_discover_files_sorted(self, repository):
        assert relative_names(repository, repository.discover_files()) == [
            "Laravel/Interview_Questions.md",
            "Laravel/README.md",
            "PHP/README.md",
            "README.md",
        ]

    def test_ignored_directories_and_other_extensions(self, notes_root, config):
        write(notes_root, "node_modules/pkg/README.md", "# vendored\n")
        write(notes_root, "Laravel/notes.txt", "not markdown\n")
        write(notes_root, "General/Tips.markdown", "# Tips\n")

        repository = NotesRepository(str(notes_root), config=config)
        names = relative_names(repository, repository.discover_files())

        assert "node_modules/pkg/README.md" not in names
        assert "Laravel/notes.txt" not in names
        assert "General/Tips.markdown" in names

    def test_missing_root_raises(self, tmp_path, config):
        with pytest.raises(FileNotFoundError):
            NotesRepository(str(tmp_path / "missing"), config=config)

    def test_root_index_is_case_insensitive(self, tmp_path, config):
        write(tmp_path, "readme.md", "# Index\n")
        repository = NotesRepository(str(tmp_path), config=config)
        assert repository.root_index().name == "readme.md"

    def test_topic_folders(self, repository):
        topics = repository.topic_folders()

        assert [t.name for t in topics] == ["Laravel", "PHP"]
        laravel = topics[0]
        assert laravel.has_readme
        assert [p.name for p in laravel.content_files] == ["Interview_Questions.md"]
        assert topics[1].content_files == []

    def test_undecodable_file_is_recorded(self, notes_root, config):
        (notes_root / "Broken.md").write_bytes(b"# \xff\xfe broken\n")

        repository = NotesRepository(str(notes_root), config=config)
        documents = repository.load()

        assert len(documents) == 4
        assert [p.name for p in repository.load_errors] == ["Broken.md"]
        assert repository.get_document(notes_root / "Broken.md") is None


class TestQuestions:
    def test_extract_questions(self, repository, notes_root):
        document = repository.get_document(notes_root / "Laravel/Interview_Questions.md")
        entries = repository.extract_questions(document)

        assert [e.title for e in entries] == [
            "What is middleware?",
            "Accessors & Mutators",
            "Example",
            "미들웨어란?",
        ]

        middleware = entries[0]
        assert middleware.anchor == "what-is-middleware"
        assert middleware.answer == "Middleware filters HTTP requests entering the application."
        assert [b.language for b in middleware.code_blocks] == ["php"]
        assert middleware.is_question
        assert middleware.topic == "Laravel"
        assert middleware.file_path == "Laravel/Interview_Questions.md"

    def test_code_only_entry_and_hierarchy(self, repository, notes_root):
        document = repository.get_document(notes_root / "Laravel/Interview_Questions.md")
        example = repository.extract_questions(document)[2]

        assert example.answer == ""
        assert "ucfirst" in example.code_blocks[0].content
        assert example.hierarchy == [
            {"level": 1, "title": "Laravel Interview Questions"},
            {"level": 2, "title": "Accessors & Mutators"},
            {"level": 3, "title": "Example"},
        ]

    def test_headings_without_content_are_dropped(self, tmp_path, config):
        write(tmp_path, "README.md", "# Top\n\n## Section\n\n### Question?\n\nAnswer.\n")
        repository = NotesRepository(str(tmp_path), config=config)
        entries = list(repository.iter_questions())

        assert [e.title for e in entries] == ["Question?"]
        assert entries[0].topic is None

    def test_iter_questions_topic_filter(self, repository):
        assert len(list(repository.iter_questions())) == 5
        assert len(list(repository.iter_questions(topic="laravel"))) == 4
        assert [e.title for e in repository.iter_questions(topic="PHP")] == [
            "What is a closure?"
        ]

    def test_question_min_level(self, repository, config, notes_root):
        config.QUESTION_MIN_LEVEL = 3
        document = repository.get_document(notes_root / "Laravel/Interview_Questions.md")
        assert [e.title for e in repository.extract_questions(document)] == ["Example"]


class TestTocExtraction:
    def test_extract_toc_nesting(self, repository, notes_root):
        document = repository.get_document(notes_root / "Laravel/README.md")
        entries = repository.extract_toc(document)

        assert [(e.title, e.level, e.anchor) for e in entries] == [
            ("Interview Questions", 0, None),
            ("What is middleware?", 1, "what-is-middleware"),
            ("Accessors & Mutators", 1, "accessors--mutators"),
        ]
        assert entries[1].file_path == "./Interview_Questions.md"
        assert entries[1].target == "./Interview_Questions.md#what-is-middleware"
        assert entries[2].hierarchy == [
            {"level": 0, "title": "Interview Questions"},
            {"level": 1, "title": "Accessors & Mutators"},
        ]

    def test_external_links_are_not_toc_entries(self, tmp_path, config):
        write(tmp_path, "README.md", "- [Docs](https://laravel.com/docs)\n- [Local](#local)\n")
        repository = NotesRepository(str(tmp_path), config=config)
        document = repository.get_document(tmp_path / "README.md")
        assert [e.title for e in repository.extract_toc(document)] == ["Local"]


def test_stats(repository):
    stats = repository.stats()

    assert stats["file_count"] == 4
    assert stats["topic_count"] == 2
    assert stats["question_count"] == 5
    assert stats["code_block_count"] == 3
    assert stats["code_blocks_without_language"] == 0
    assert stats["links"] == {"anchor": 4, "file": 6, "external": 0}
    assert stats["load_error_count"] == 0
