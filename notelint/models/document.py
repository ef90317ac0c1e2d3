"""Markdown document related data models."""

from typing import List, Dict, Optional, Set
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class LinkKind(Enum):
    """링크 유형 열거형"""

    ANCHOR = "anchor"
    FILE = "file"
    EXTERNAL = "external"


@dataclass
class Heading:
    """문서 제목(헤딩)을 나타내는 데이터 클래스"""

    text: str
    title: str
    level: int
    line: int
    slug: str
    anchor: str = ""
    setext: bool = False
    end_line: int = 0


@dataclass
class CodeBlock:
    """펜스 코드 블록을 나타내는 데이터 클래스"""

    language: Optional[str]
    content: str
    line: int
    fence: str = "```"
    closed: bool = True
    end_line: int = 0

    @property
    def has_language(self) -> bool:
        return bool(self.language)


@dataclass
class Link:
    """문서 안의 링크를 나타내는 데이터 클래스"""

    text: str
    target: str
    line: int
    kind: LinkKind
    path: str = ""
    fragment: Optional[str] = None
    in_list: bool = False
    is_image: bool = False
    indent: int = 0


@dataclass
class HtmlAnchor:
    """인라인 HTML로 선언된 앵커"""

    name: str
    line: int


@dataclass
class MarkdownDocument:
    """파싱된 마크다운 문서"""

    path: Optional[Path]
    headings: List[Heading] = field(default_factory=list)
    code_blocks: List[CodeBlock] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)
    html_anchors: List[HtmlAnchor] = field(default_factory=list)
    line_count: int = 0
    text: str = ""

    @property
    def title(self) -> Optional[str]:
        """문서 제목: 첫 번째 레벨 1 헤딩, 없으면 첫 번째 헤딩"""
        for heading in self.headings:
            if heading.level == 1:
                return heading.title
        if self.headings:
            return self.headings[0].title
        return None

    def anchors(self) -> Set[str]:
        """헤딩 앵커와 HTML 앵커의 집합을 반환합니다."""
        names = {heading.anchor for heading in self.headings if heading.anchor}
        names.update(anchor.name for anchor in self.html_anchors)
        return names

    def slug_counts(self) -> Dict[str, int]:
        """기본 슬러그별 헤딩 개수를 반환합니다."""
        counts: Dict[str, int] = {}
        for heading in self.headings:
            if heading.slug:
                counts[heading.slug] = counts.get(heading.slug, 0) + 1
        return counts

    def has_anchor(self, fragment: str) -> bool:
        """
        프래그먼트가 이 문서의 앵커로 연결되는지 확인합니다.

        빈 프래그먼트는 문서 맨 위를 가리키므로 항상 유효합니다.
        대소문자가 다른 경우에도 소문자로 한 번 더 비교합니다.

        Args:
            fragment: 퍼센트 디코딩된 프래그먼트 (# 제외)

        Returns:
            앵커 존재 여부
        """
        if not fragment:
            return True
        names = self.anchors()
        if fragment in names:
            return True
        return fragment.lower() in {name.lower() for name in names}

    def anchor_claims(self, fragment: str) -> List[Heading]:
        """
        프래그먼트를 자기 앵커로 기대할 수 있는 헤딩들을 반환합니다.

        실제 앵커가 같은 헤딩과, 기본 슬러그가 같은 헤딩을 모두 포함합니다.
        둘 이상이면 링크가 작성자의 의도와 다른 헤딩으로 연결될 수 있습니다.
        """
        key = fragment.lower()
        return [
            heading
            for heading in self.headings
            if heading.title and key in (heading.anchor.lower(), heading.slug.lower())
        ]
