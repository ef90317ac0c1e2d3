"""
질문 항목 검색 시스템
제목 검색(Title), 키워드 검색(Keyword), 하이브리드 검색을 제공합니다.
"""

import logging
import re
from typing import List, Dict, Any, Optional, Set
from enum import Enum
from dataclasses import dataclass

from ..models.question import QuestionEntry
from .repository import NotesRepository

# 로깅 설정
logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"\w+")


class SearchType(Enum):
    """검색 유형 열거형"""

    TITLE = "title"
    KEYWORD = "keyword"
    HYBRID = "hybrid"


@dataclass
class SearchResult:
    """검색 결과를 나타내는 데이터 클래스"""

    entry: QuestionEntry
    score: float
    search_type: str
    title_score: Optional[float] = None
    content_score: Optional[float] = None

    @property
    def hierarchy(self) -> List[Dict[str, Any]]:
        return self.entry.hierarchy


def tokenize(text: str) -> List[str]:
    """소문자 단어 토큰 리스트를 반환합니다."""
    return TOKEN_PATTERN.findall(text.lower())


def match_ratio(terms: Set[str], tokens: Set[str]) -> float:
    """
    쿼리 단어 중 텍스트에 나타난 비율을 계산합니다.

    토큰이 쿼리 단어로 시작하면 일치로 봅니다 ("미들웨어"는 "미들웨어는"과 일치).

    Args:
        terms: 쿼리 단어 집합
        tokens: 텍스트 토큰 집합

    Returns:
        0과 1 사이의 점수
    """
    if not terms:
        return 0.0
    matched = sum(1 for term in terms if any(token.startswith(term) for token in tokens))
    return matched / len(terms)


class QuestionSearch:
    """질문 항목 검색 클래스"""

    def __init__(
        self,
        repository: NotesRepository,
        title_weight: Optional[float] = None,
        content_weight: Optional[float] = None,
    ):
        """
        검색 시스템을 초기화합니다.

        Args:
            repository: 검색할 노트 저장소
            title_weight: 하이브리드 검색의 제목 가중치
            content_weight: 하이브리드 검색의 본문 가중치
        """
        self.repository = repository
        config = repository.config
        self.title_weight = config.TITLE_WEIGHT if title_weight is None else title_weight
        self.content_weight = (
            config.CONTENT_WEIGHT if content_weight is None else content_weight
        )
        self._entries: Optional[List[QuestionEntry]] = None

    @property
    def entries(self) -> List[QuestionEntry]:
        if self._entries is None:
            self._entries = list(self.repository.iter_questions())
            logger.info(f"검색 대상 질문 항목: {len(self._entries)}개")
        return self._entries

    def _score(self, query: str, search_type: SearchType) -> List[SearchResult]:
        terms = set(tokenize(query))
        if not terms:
            logger.warning("검색어에 단어가 없습니다.")
            return []

        results = []
        for entry in self.entries:
            title_score = match_ratio(terms, set(tokenize(entry.title)))
            content_score = match_ratio(terms, set(tokenize(entry.text)))

            if search_type == SearchType.TITLE:
                score = title_score
            elif search_type == SearchType.KEYWORD:
                score = content_score
            else:
                score = (
                    self.title_weight * title_score
                    + self.content_weight * content_score
                )

            results.append(
                SearchResult(
                    entry=entry,
                    score=score,
                    search_type=search_type.value,
                    title_score=title_score,
                    content_score=content_score,
                )
            )

        return results

    def title_search(self, query: str, limit: int = 10) -> List[SearchResult]:
        """
        질문 제목에서 검색합니다.

        Args:
            query: 검색 쿼리
            limit: 반환할 결과 수

        Returns:
            검색 결과 리스트
        """
        logger.info(f"제목 검색 수행: '{query}'")
        return self.search(query, SearchType.TITLE, limit)

    def keyword_search(self, query: str, limit: int = 10) -> List[SearchResult]:
        """
        답변 본문과 코드에서 검색합니다.

        Args:
            query: 검색 쿼리
            limit: 반환할 결과 수

        Returns:
            검색 결과 리스트
        """
        logger.info(f"키워드 검색 수행: '{query}'")
        return self.search(query, SearchType.KEYWORD, limit)

    def hybrid_search(self, query: str, limit: int = 10) -> List[SearchResult]:
        """제목 점수와 본문 점수를 가중 합산하여 검색합니다."""
        logger.info(f"하이브리드 검색 수행: '{query}'")
        return self.search(query, SearchType.HYBRID, limit)

    def _match_hierarchy_filter(
        self, hierarchy: List[Dict[str, Any]], filter_dict: Dict[str, Any]
    ) -> bool:
        """
        계층 구조가 필터 조건을 만족하는지 확인합니다.

        Args:
            hierarchy: 질문 항목의 계층 구조
            filter_dict: 필터 조건 (예: {'level': 2, 'title': 'Eloquent'})

        Returns:
            필터 조건 만족 여부
        """
        for level_info in hierarchy:
            match = True
            for key, value in filter_dict.items():
                if key not in level_info or level_info[key] != value:
                    match = False
                    break
            if match:
                return True
        return False

    def search(
        self,
        query: str,
        search_type: SearchType = SearchType.HYBRID,
        limit: int = 10,
        topic_filter: Optional[str] = None,
        hierarchy_filter: Optional[Dict[str, Any]] = None,
        min_score: Optional[float] = None,
    ) -> List[SearchResult]:
        """
        통합 검색 인터페이스입니다.

        Args:
            query: 검색 쿼리
            search_type: 검색 유형
            limit: 반환할 결과 수
            topic_filter: 주제 폴더 이름 필터
            hierarchy_filter: 계층 구조 필터
            min_score: 이 점수 이하의 결과는 제외 (기본값: 설정의 MIN_SCORE)

        Returns:
            점수 내림차순으로 정렬된 검색 결과 리스트
        """
        if min_score is None:
            min_score = self.repository.config.MIN_SCORE

        results = [r for r in self._score(query, search_type) if r.score > min_score]

        if topic_filter:
            results = [
                r for r in results if (r.entry.topic or "").lower() == topic_filter.lower()
            ]

        if hierarchy_filter:
            results = [
                r
                for r in results
                if self._match_hierarchy_filter(r.entry.hierarchy, hierarchy_filter)
            ]

        results.sort(key=lambda r: (-r.score, r.entry.file_path, r.entry.line))
        results = results[:limit]

        logger.info(f"{search_type.value} 검색 결과: {len(results)}개")
        return results

    def get_stats(self) -> Dict[str, Any]:
        """
        질문 항목 통계를 조회합니다.

        Returns:
            주제별 질문 수와 전체 통계
        """
        by_topic: Dict[str, int] = {}
        code_count = 0
        for entry in self.entries:
            topic = entry.topic or "(root)"
            by_topic[topic] = by_topic.get(topic, 0) + 1
            code_count += len(entry.code_blocks)

        total = len(self.entries)
        return {
            "question_count": total,
            "explicit_question_count": sum(1 for e in self.entries if e.is_question),
            "questions_by_topic": by_topic,
            "code_block_count": code_count,
            "avg_answer_length": (
                sum(len(e.answer) for e in self.entries) / total if total else 0
            ),
        }
