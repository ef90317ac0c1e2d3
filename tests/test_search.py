"""Tests for question search."""

import pytest

from notelint.core.search import QuestionSearch, SearchType, match_ratio, tokenize


@pytest.fixture
def search(repository):
    return QuestionSearch(repository)


def titles(results):
    return [r.entry.title for r in results]


class TestScoring:
    def test_tokenize(self):
        assert tokenize("What is `Route::get()`?") == ["what", "is", "route", "get"]

    def test_prefix_match(self):
        assert match_ratio({"미들웨어"}, {"미들웨어는", "요청"}) == 1.0
        assert match_ratio({"route", "group"}, {"routes"}) == 0.5
        assert match_ratio(set(), {"x"}) == 0.0


class TestSearch:
    def test_hybrid_ranks_title_match_first(self, search):
        results = search.search("middleware")

        assert titles(results) == ["What is middleware?", "What is a closure?"]
        assert results[0].score == pytest.approx(1.0)
        assert results[1].score == pytest.approx(0.4)
        assert results[1].title_score == 0.0

    def test_keyword_search_reads_code(self, search):
        results = search.keyword_search("ucfirst")

        assert titles(results) == ["Example"]
        assert results[0].search_type == "keyword"

    def test_title_search(self, search):
        assert titles(search.title_search("accessors")) == ["Accessors & Mutators"]

    def test_korean_query(self, search):
        assert titles(search.hybrid_search("미들웨어")) == ["미들웨어란?"]

    def test_topic_filter(self, search):
        results = search.search("middleware", topic_filter="php")
        assert titles(results) == ["What is a closure?"]

    def test_hierarchy_filter(self, search):
        results = search.search(
            "ucfirst",
            SearchType.KEYWORD,
            hierarchy_filter={"title": "Accessors & Mutators"},
        )
        assert titles(results) == ["Example"]
        assert search.search("ucfirst", hierarchy_filter={"level": 4}) == []

    def test_limit_and_min_score(self, search):
        assert len(search.search("middleware", limit=1)) == 1
        assert titles(search.search("middleware", min_score=0.5)) == ["What is middleware?"]

    @pytest.mark.parametrize("query", ["", "?!"])
    def test_query_without_words(self, search, query):
        assert search.search(query) == []

    def test_weights_override(self, repository):
        search = QuestionSearch(repository, title_weight=0.0, content_weight=1.0)
        results = search.search("middleware")
        assert [r.score for r in results] == [pytest.approx(1.0), pytest.approx(1.0)]


def test_get_stats(search):
    stats = search.get_stats()

    assert stats["question_count"] == 5
    assert stats["explicit_question_count"] == 3
    assert stats["questions_by_topic"] == {"Laravel": 4, "PHP": 1}
    assert stats["code_block_count"] == 3
    assert stats["avg_answer_length"] > 0
