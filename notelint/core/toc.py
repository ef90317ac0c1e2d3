"""
목차(Table of Contents) 생성 및 갱신
헤딩 목록으로 목차를 만들고 <!-- toc --> 표시 사이의 내용을 교체합니다.
"""

import logging
import re
from typing import List, Dict, Any, Optional, Tuple

from ..models.document import MarkdownDocument
from ..models.toc import TOCEntry
from .parser import MarkdownParser

# 로깅 설정
logger = logging.getLogger(__name__)

TOC_START_PATTERN = re.compile(r"^\s*<!--\s*toc\s*-->\s*$", re.IGNORECASE)
TOC_END_PATTERN = re.compile(r"^\s*<!--\s*(?:tocstop|/toc)\s*-->\s*$", re.IGNORECASE)


def build_toc(
    document: MarkdownDocument, min_level: int = 2, max_level: int = 3
) -> List[TOCEntry]:
    """
    문서의 헤딩으로 목차 항목을 만듭니다.

    Args:
        document: 파싱된 문서
        min_level: 포함할 최소 헤딩 레벨
        max_level: 포함할 최대 헤딩 레벨

    Returns:
        목차 항목 리스트
    """
    toc_entries = []
    current_hierarchy: List[Dict[str, Any]] = []

    for heading in document.headings:
        if not (min_level <= heading.level <= max_level) or not heading.title:
            continue

        hierarchy_entry = {"level": heading.level, "title": heading.title}
        current_hierarchy = [
            h for h in current_hierarchy if h["level"] < heading.level
        ] + [hierarchy_entry]

        toc_entries.append(
            TOCEntry(
                title=heading.title,
                level=heading.level,
                file_path="",
                hierarchy=list(current_hierarchy),
                anchor=heading.anchor,
                line=heading.line,
            )
        )

    return toc_entries


def render_toc(entries: List[TOCEntry], indent: str = "  ") -> str:
    """
    목차 항목을 마크다운 리스트로 렌더링합니다.

    Args:
        entries: 목차 항목 리스트
        indent: 한 단계 들여쓰기 문자열

    Returns:
        마크다운 목차 텍스트
    """
    if not entries:
        return ""

    base_level = min(entry.level for entry in entries)
    lines = []
    for entry in entries:
        title = entry.title.replace("[", "\\[").replace("]", "\\]")
        lines.append(f"{indent * (entry.level - base_level)}- [{title}](#{entry.anchor})")
    return "\n".join(lines)


def find_toc_region(
    text: str, document: Optional[MarkdownDocument] = None
) -> Optional[Tuple[int, int]]:
    """
    목차 표시의 위치를 찾습니다.

    `<!-- toc -->`와 `<!-- tocstop -->` (또는 `<!-- /toc -->`) 사이가 목차 영역이며,
    주석 안의 공백과 대소문자는 구분하지 않습니다. 펜스 코드 블록 안의 표시는
    예시로 보고 무시합니다.

    Args:
        text: 마크다운 원문
        document: 같은 원문을 파싱한 문서 (없으면 새로 파싱)

    Returns:
        (시작 표시 줄 인덱스, 끝 표시 줄 인덱스) 또는 None
    """
    if document is None:
        document = MarkdownParser().parse(text)

    fenced = set()
    for block in document.code_blocks:
        fenced.update(range(block.line - 1, block.end_line))

    start = None
    for index, line in enumerate(text.splitlines()):
        if index in fenced:
            continue
        if start is None and TOC_START_PATTERN.match(line):
            start = index
        elif start is not None and TOC_END_PATTERN.match(line):
            return start, index

    return None


def _current_toc(text: str, region: Tuple[int, int]) -> str:
    lines = text.splitlines()
    return "\n".join(lines[region[0] + 1 : region[1]]).strip()


def is_toc_stale(
    document: MarkdownDocument, min_level: int = 2, max_level: int = 3
) -> bool:
    """목차 표시가 있고 그 내용이 현재 헤딩과 다르면 True를 반환합니다."""
    region = find_toc_region(document.text, document)
    if region is None:
        return False

    expected = render_toc(build_toc(document, min_level, max_level))
    return _current_toc(document.text, region) != expected


def update_toc(text: str, min_level: int = 2, max_level: int = 3) -> Tuple[str, bool]:
    """
    목차 표시 사이의 내용을 새로 생성한 목차로 교체합니다.

    Args:
        text: 마크다운 원문
        min_level: 포함할 최소 헤딩 레벨
        max_level: 포함할 최대 헤딩 레벨

    Returns:
        (갱신된 텍스트, 변경 여부)
    """
    document = MarkdownParser().parse(text)
    region = find_toc_region(text, document)
    if region is None:
        logger.debug("목차 표시(<!-- toc -->)가 없습니다.")
        return text, False

    rendered = render_toc(build_toc(document, min_level, max_level))

    if _current_toc(text, region) == rendered:
        return text, False

    lines = text.splitlines()
    start, end = region
    body = ["", rendered, ""] if rendered else [""]
    new_lines = lines[: start + 1] + body + lines[end:]

    new_text = "\n".join(new_lines)
    if text.endswith("\n"):
        new_text += "\n"

    logger.info(f"목차 갱신: 항목 {len(rendered.splitlines())}개")
    return new_text, True
