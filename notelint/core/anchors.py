"""
헤딩 텍스트에서 GitHub 방식의 앵커(슬러그)를 생성하는 모듈
"""

import logging
import re
from typing import Dict, List

from bs4 import BeautifulSoup

# 로깅 설정
logger = logging.getLogger(__name__)

CODE_SPAN_PATTERN = re.compile(r"(`+)(.+?)\1")
IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
INLINE_LINK_PATTERN = re.compile(r"\[([^\]]*)\]\([^)]*\)")
REFERENCE_LINK_PATTERN = re.compile(r"\[([^\]]*)\]\[[^\]]*\]")
ESCAPE_PATTERN = re.compile(r"\\([!-/:-@\[-`{-~])")
HTML_PATTERN = re.compile(r"<[A-Za-z/!]|&[#A-Za-z0-9]+;")

EMPHASIS_PATTERNS = [
    (re.compile(r"(\*\*|__)(.+?)\1"), r"\2"),
    (re.compile(r"~~(.+?)~~"), r"\1"),
    (re.compile(r"\*(.+?)\*"), r"\1"),
    (re.compile(r"(?<!\w)_(.+?)_(?!\w)"), r"\1"),
]

SLUG_STRIP_PATTERN = re.compile(r"[^\w\- ]")


def _strip_text_segment(segment: str) -> str:
    segment = IMAGE_PATTERN.sub(r"\1", segment)
    segment = INLINE_LINK_PATTERN.sub(r"\1", segment)
    segment = REFERENCE_LINK_PATTERN.sub(r"\1", segment)

    if HTML_PATTERN.search(segment):
        segment = BeautifulSoup(segment, "html.parser").get_text()

    for pattern, replacement in EMPHASIS_PATTERNS:
        segment = pattern.sub(replacement, segment)

    return ESCAPE_PATTERN.sub(r"\1", segment)


def strip_inline_markup(text: str) -> str:
    """
    헤딩의 인라인 마크업을 제거하여 렌더링된 텍스트를 얻습니다.

    인라인 코드 안의 내용은 그대로 두고, 나머지 부분에서 이미지, 링크,
    강조 표시, HTML 태그를 제거합니다.

    Args:
        text: 헤딩 원문 텍스트

    Returns:
        마크업이 제거된 텍스트
    """
    parts: List[str] = []
    position = 0

    for match in CODE_SPAN_PATTERN.finditer(text):
        parts.append(_strip_text_segment(text[position : match.start()]))
        code = match.group(2)
        if code.startswith(" ") and code.endswith(" ") and code.strip():
            code = code[1:-1]
        parts.append(code)
        position = match.end()

    parts.append(_strip_text_segment(text[position:]))
    return "".join(parts).strip()


def github_slug(text: str) -> str:
    """
    GitHub 규칙에 따라 기본 슬러그를 생성합니다.

    소문자로 바꾼 뒤 문자, 숫자, 밑줄, 하이픈, 공백 이외의 문자를 지우고
    공백 하나하나를 하이픈으로 바꿉니다. 한글 등 비 ASCII 문자는 유지됩니다.

    Args:
        text: 마크업이 제거된 헤딩 텍스트

    Returns:
        슬러그 문자열
    """
    slug = SLUG_STRIP_PATTERN.sub("", text.strip().lower())
    return slug.replace(" ", "-")


class Slugger:
    """문서 하나 안에서 중복되지 않는 앵커를 발급하는 클래스"""

    def __init__(self):
        self.occurrences: Dict[str, int] = {}

    def slug(self, text: str) -> str:
        """
        중복을 고려한 고유 앵커를 반환합니다.

        같은 슬러그가 다시 나오면 -1, -2 ... 접미사를 붙이며, 접미사를 붙인
        결과가 이미 쓰인 경우 다음 번호로 넘어갑니다.

        Args:
            text: 마크업이 제거된 헤딩 텍스트

        Returns:
            고유 앵커
        """
        base = github_slug(text)
        result = base

        while result in self.occurrences:
            self.occurrences[base] += 1
            result = f"{base}-{self.occurrences[base]}"

        self.occurrences[result] = 0
        if result != base:
            logger.debug(f"중복 앵커 발견: '{base}' -> '{result}'")
        return result

    def reset(self):
        """발급 기록을 초기화합니다."""
        self.occurrences = {}
