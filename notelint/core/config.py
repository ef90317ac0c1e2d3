"""
환경 설정 및 구성 관리
"""

import os
from typing import List

from dotenv import load_dotenv

# 환경 변수 로드
load_dotenv()


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _to_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """애플리케이션 설정 클래스"""

    # 저장소 설정
    NOTES_ROOT = os.getenv("NOTES_ROOT", ".")
    INDEX_FILE_NAME = os.getenv("INDEX_FILE_NAME", "README.md")
    MARKDOWN_EXTENSIONS = _split_list(os.getenv("MARKDOWN_EXTENSIONS", ".md,.markdown"))
    IGNORE_PATTERNS = _split_list(
        os.getenv("IGNORE_PATTERNS", ".git,node_modules,.venv,venv,__pycache__")
    )

    # 질문 항목 및 목차 설정
    QUESTION_MIN_LEVEL = int(os.getenv("QUESTION_MIN_LEVEL", "2"))
    TOC_MIN_LEVEL = int(os.getenv("TOC_MIN_LEVEL", "2"))
    TOC_MAX_LEVEL = int(os.getenv("TOC_MAX_LEVEL", "3"))

    # 검사 설정
    DISABLED_RULES = _split_list(os.getenv("DISABLED_RULES", ""))

    # 로깅 설정
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    SHOW_PROGRESS = _to_bool(os.getenv("SHOW_PROGRESS", "true"))

    # 검색 설정
    DEFAULT_SEARCH_LIMIT = int(os.getenv("DEFAULT_SEARCH_LIMIT", "10"))
    MIN_SCORE = float(os.getenv("MIN_SCORE", "0.0"))
    TITLE_WEIGHT = float(os.getenv("TITLE_WEIGHT", "0.6"))
    CONTENT_WEIGHT = float(os.getenv("CONTENT_WEIGHT", "0.4"))

    @property
    def notes_root(self):
        """노트 저장소 루트 경로"""
        return self.NOTES_ROOT

    @property
    def index_file_name(self):
        """인덱스 파일 이름"""
        return self.INDEX_FILE_NAME

    @property
    def markdown_extensions(self):
        """마크다운 파일 확장자 목록 (소문자)"""
        return [ext.lower() for ext in self.MARKDOWN_EXTENSIONS]

    @property
    def disabled_rules(self):
        """비활성화된 검사 규칙"""
        return list(self.DISABLED_RULES)

    def validate(self):
        """설정 유효성 검사"""
        errors = []

        if not self.NOTES_ROOT:
            errors.append("NOTES_ROOT가 설정되지 않았습니다.")

        if not self.INDEX_FILE_NAME:
            errors.append("INDEX_FILE_NAME이 설정되지 않았습니다.")

        if not self.MARKDOWN_EXTENSIONS:
            errors.append("MARKDOWN_EXTENSIONS에 확장자가 하나 이상 있어야 합니다.")

        for ext in self.MARKDOWN_EXTENSIONS:
            if not ext.startswith("."):
                errors.append(f"확장자는 '.'으로 시작해야 합니다: {ext}")

        # 헤딩 레벨 검증
        for name in ("QUESTION_MIN_LEVEL", "TOC_MIN_LEVEL", "TOC_MAX_LEVEL"):
            value = getattr(self, name)
            if not (1 <= value <= 6):
                errors.append(f"{name}는 1과 6 사이의 값이어야 합니다.")

        if self.TOC_MIN_LEVEL > self.TOC_MAX_LEVEL:
            errors.append("TOC_MIN_LEVEL은 TOC_MAX_LEVEL보다 작거나 같아야 합니다.")

        if self.LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"알 수 없는 LOG_LEVEL입니다: {self.LOG_LEVEL}")

        # 검색 설정 검증
        if self.DEFAULT_SEARCH_LIMIT <= 0:
            errors.append("DEFAULT_SEARCH_LIMIT는 0보다 커야 합니다.")

        if not (0 <= self.MIN_SCORE <= 1):
            errors.append("MIN_SCORE는 0과 1 사이의 값이어야 합니다.")

        if not (0 <= self.TITLE_WEIGHT <= 1):
            errors.append("TITLE_WEIGHT는 0과 1 사이의 값이어야 합니다.")

        if not (0 <= self.CONTENT_WEIGHT <= 1):
            errors.append("CONTENT_WEIGHT는 0과 1 사이의 값이어야 합니다.")

        if abs(self.TITLE_WEIGHT + self.CONTENT_WEIGHT - 1.0) > 0.001:
            errors.append("TITLE_WEIGHT + CONTENT_WEIGHT는 1.0이어야 합니다.")

        return errors

    def print_config(self):
        """현재 설정을 출력합니다."""
        print("현재 설정:")
        print(f"  노트 루트: {self.NOTES_ROOT}")
        print(f"  인덱스 파일: {self.INDEX_FILE_NAME}")
        print(f"  마크다운 확장자: {', '.join(self.MARKDOWN_EXTENSIONS)}")
        print(f"  무시 패턴: {', '.join(self.IGNORE_PATTERNS)}")
        print(f"  질문 최소 헤딩 레벨: {self.QUESTION_MIN_LEVEL}")
        print(f"  목차 헤딩 레벨: {self.TOC_MIN_LEVEL}-{self.TOC_MAX_LEVEL}")
        print(f"  비활성화 규칙: {', '.join(self.DISABLED_RULES) or '없음'}")
        print(f"  로그 레벨: {self.LOG_LEVEL}")
        print(f"  진행률 표시: {'예' if self.SHOW_PROGRESS else '아니오'}")
        print(f"  기본 검색 제한: {self.DEFAULT_SEARCH_LIMIT}")
        print(f"  최소 점수: {self.MIN_SCORE}")
        print(f"  제목 가중치: {self.TITLE_WEIGHT}")
        print(f"  본문 가중치: {self.CONTENT_WEIGHT}")


def validate_config(config: Config) -> None:
    """
    설정 유효성 검사 함수

    Args:
        config: Config 인스턴스

    Raises:
        ValueError: 설정이 유효하지 않은 경우
    """
    errors = config.validate()
    if errors:
        error_message = "설정 오류가 발견되었습니다:\n" + "\n".join(
            f"  - {error}" for error in errors
        )
        raise ValueError(error_message)
