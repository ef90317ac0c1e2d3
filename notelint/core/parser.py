"""
마크다운 문서 파서
헤딩, 펜스 코드 블록, 링크, HTML 앵커를 추출하여 MarkdownDocument로 만듭니다.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple
from urllib.parse import unquote

from bs4 import BeautifulSoup

from ..models.document import (
    CodeBlock,
    Heading,
    HtmlAnchor,
    Link,
    LinkKind,
    MarkdownDocument,
)
from .anchors import CODE_SPAN_PATTERN, Slugger, github_slug, strip_inline_markup

# 로깅 설정
logger = logging.getLogger(__name__)

FENCE_OPEN_PATTERN = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")
ATX_PATTERN = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?[ \t]*$")
ATX_CLOSING_PATTERN = re.compile(r"(?:^|[ \t]+)#+$")
SETEXT_PATTERN = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
LIST_ITEM_PATTERN = re.compile(r"^(\s*)(?:[-*+]|\d+[.)])[ \t]+")
INDENTED_CODE_PATTERN = re.compile(r"^(?: {4}|\t)")
BLOCK_START_PATTERN = re.compile(r"^ {0,3}(?:>|<|\||([-*_])(?:[ \t]*\1){2,}[ \t]*$)")
REFERENCE_DEF_PATTERN = re.compile(r"^ {0,3}\[(?!\^)([^\]]+)\]:[ \t]*(<[^>]*>|\S+)")
INLINE_LINK_PATTERN = re.compile(
    r"(!?)\[((?:[^\[\]]|\[[^\[\]]*\])*)\]"
    r"\(\s*(<[^>]*>|[^\s()]*(?:\([^\s()]*\)[^\s()]*)*)"
    r"(?:\s+(?:\"[^\"]*\"|'[^']*'|\([^)]*\)))?\s*\)"
)
HTML_TAG_PATTERN = re.compile(r"<[A-Za-z]")
SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
FRONT_MATTER_END = ("---", "...")


def classify_target(target: str) -> Tuple[LinkKind, str, Optional[str]]:
    """
    링크 대상을 분류하고 경로와 프래그먼트로 나눕니다.

    Args:
        target: 링크 대상 원문

    Returns:
        (링크 유형, 퍼센트 디코딩된 경로, 퍼센트 디코딩된 프래그먼트)
    """
    target = target.strip()
    if target.startswith("<") and target.endswith(">"):
        target = target[1:-1].strip()

    if not target or target.startswith("#"):
        return LinkKind.ANCHOR, "", unquote(target[1:])

    if SCHEME_PATTERN.match(target) or target.startswith("//"):
        return LinkKind.EXTERNAL, target, None

    fragment = None
    if "#" in target:
        target, fragment = target.split("#", 1)
        fragment = unquote(fragment)

    path = target.split("?", 1)[0]
    return LinkKind.FILE, unquote(path), fragment


class MarkdownParser:
    """마크다운 텍스트를 MarkdownDocument로 변환하는 파서"""

    def parse_file(self, file_path: Path) -> MarkdownDocument:
        """
        파일을 읽어 파싱합니다.

        Args:
            file_path: 마크다운 파일 경로

        Returns:
            파싱된 문서

        Raises:
            UnicodeDecodeError: UTF-8로 읽을 수 없는 경우
            OSError: 파일을 읽을 수 없는 경우
        """
        logger.debug(f"마크다운 파일 파싱 중: {file_path}")

        try:
            text = Path(file_path).read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError) as e:
            logger.error(f"파일을 읽는 중 오류 발생: {file_path}: {e}")
            raise

        return self.parse(text, path=Path(file_path))

    def parse(self, text: str, path: Optional[Path] = None) -> MarkdownDocument:
        """
        마크다운 텍스트를 파싱합니다.

        Args:
            text: 마크다운 원문
            path: 문서 경로 (선택)

        Returns:
            파싱된 문서
        """
        lines = text.splitlines()
        document = MarkdownDocument(path=path, line_count=len(lines), text=text)

        paragraph: List[Tuple[int, str]] = []
        in_list = False
        fence: Optional[CodeBlock] = None
        fence_indent = 0
        fence_lines: List[str] = []

        start = self._skip_front_matter(lines)

        for index in range(start, len(lines)):
            line = lines[index]
            line_no = index + 1

            # 펜스 코드 블록 내부
            if fence is not None:
                if self._closes_fence(line, fence.fence):
                    fence.content = "\n".join(fence_lines)
                    fence.end_line = line_no
                    document.code_blocks.append(fence)
                    fence = None
                else:
                    fence_lines.append(self._strip_indent(line, fence_indent))
                continue

            if not line.strip():
                paragraph = []
                continue

            opening = self._open_fence(line, line_no)
            if opening is not None:
                fence, fence_indent = opening
                fence_lines = []
                paragraph = []
                in_list = False
                continue

            atx = ATX_PATTERN.match(line)
            if atx:
                content = ATX_CLOSING_PATTERN.sub("", (atx.group(2) or "").rstrip())
                document.headings.append(
                    self._make_heading(content.strip(), len(atx.group(1)), line_no)
                )
                paragraph = []
                in_list = False
                self._scan_inline(line, line_no, document)
                continue

            setext = SETEXT_PATTERN.match(line)
            if setext and paragraph:
                content = " ".join(part.strip() for _, part in paragraph)
                level = 1 if setext.group(1).startswith("=") else 2
                heading = self._make_heading(content, level, paragraph[0][0])
                heading.setext = True
                heading.end_line = line_no
                document.headings.append(heading)
                paragraph = []
                continue

            reference = REFERENCE_DEF_PATTERN.match(line)
            if reference:
                document.links.append(
                    self._make_link(reference.group(1), reference.group(2), line_no)
                )
                paragraph = []
                continue

            list_item = LIST_ITEM_PATTERN.match(line)
            indented = INDENTED_CODE_PATTERN.match(line) is not None
            if list_item:
                in_list = True
            elif not indented:
                in_list = False

            # 문단 밖의 4칸 들여쓰기 줄은 코드 블록
            if indented and not list_item and not paragraph and not in_list:
                continue

            if list_item or BLOCK_START_PATTERN.match(line):
                paragraph = []
            elif paragraph or not line.startswith(("    ", "\t")):
                paragraph.append((line_no, line))

            self._scan_inline(line, line_no, document, list_item)

        if fence is not None:
            logger.warning(
                f"닫히지 않은 코드 블록: {path or '<text>'}:{fence.line}"
            )
            fence.content = "\n".join(fence_lines)
            fence.closed = False
            fence.end_line = len(lines)
            document.code_blocks.append(fence)

        self._assign_anchors(document)

        logger.debug(
            f"파싱 완료: 헤딩 {len(document.headings)}개, "
            f"코드 블록 {len(document.code_blocks)}개, 링크 {len(document.links)}개"
        )
        return document

    def _skip_front_matter(self, lines: List[str]) -> int:
        if not lines or lines[0].strip() != "---":
            return 0
        for index in range(1, len(lines)):
            if lines[index].strip() in FRONT_MATTER_END:
                return index + 1
        return 0

    def _open_fence(self, line: str, line_no: int) -> Optional[Tuple[CodeBlock, int]]:
        match = FENCE_OPEN_PATTERN.match(line)
        if not match:
            return None

        indent, marker, info = match.groups()
        # 백틱 펜스의 info 문자열에는 백틱이 올 수 없음
        if marker.startswith("`") and "`" in info:
            return None

        words = info.strip().split()
        language = words[0] if words else None
        block = CodeBlock(language=language, content="", line=line_no, fence=marker)
        return block, len(indent)

    def _closes_fence(self, line: str, marker: str) -> bool:
        pattern = r"^ {0,3}%s{%d,}[ \t]*$" % (re.escape(marker[0]), len(marker))
        return re.match(pattern, line) is not None

    def _strip_indent(self, line: str, indent: int) -> str:
        removable = len(line) - len(line.lstrip(" "))
        return line[min(indent, removable) :]

    def _make_heading(self, text: str, level: int, line_no: int) -> Heading:
        title = strip_inline_markup(text)
        return Heading(
            text=text,
            title=title,
            level=level,
            line=line_no,
            slug=github_slug(title),
            end_line=line_no,
        )

    def _make_link(
        self,
        text: str,
        target: str,
        line_no: int,
        in_list: bool = False,
        is_image: bool = False,
        indent: int = 0,
    ) -> Link:
        kind, path, fragment = classify_target(target)
        return Link(
            text=text,
            target=target.strip(),
            line=line_no,
            kind=kind,
            path=path,
            fragment=fragment,
            in_list=in_list,
            is_image=is_image,
            indent=indent,
        )

    def _scan_inline(
        self,
        line: str,
        line_no: int,
        document: MarkdownDocument,
        list_item: Optional[re.Match] = None,
    ):
        """한 줄에서 인라인 링크와 HTML 앵커를 추출합니다."""
        visible = CODE_SPAN_PATTERN.sub(lambda m: " " * len(m.group(0)), line)
        in_list = list_item is not None
        indent = len(list_item.group(1).expandtabs(4)) if list_item else 0

        for match in INLINE_LINK_PATTERN.finditer(visible):
            document.links.append(
                self._make_link(
                    match.group(2),
                    match.group(3),
                    line_no,
                    in_list=in_list,
                    is_image=bool(match.group(1)),
                    indent=indent,
                )
            )

        if HTML_TAG_PATTERN.search(visible):
            self._scan_html(visible, line_no, document, in_list, indent)

    def _scan_html(
        self,
        line: str,
        line_no: int,
        document: MarkdownDocument,
        in_list: bool,
        indent: int,
    ):
        soup = BeautifulSoup(line, "html.parser")

        for tag in soup.find_all(True):
            anchor_id = tag.get("id")
            if anchor_id:
                document.html_anchors.append(HtmlAnchor(name=anchor_id, line=line_no))
            if tag.name == "a" and tag.get("name"):
                document.html_anchors.append(
                    HtmlAnchor(name=tag.get("name"), line=line_no)
                )

            if tag.name == "a" and tag.get("href") is not None:
                document.links.append(
                    self._make_link(
                        tag.get_text(), tag["href"], line_no, in_list, False, indent
                    )
                )
            elif tag.name == "img" and tag.get("src"):
                document.links.append(
                    self._make_link(
                        tag.get("alt", ""), tag["src"], line_no, in_list, True, indent
                    )
                )

    def _assign_anchors(self, document: MarkdownDocument):
        slugger = Slugger()
        for heading in document.headings:
            if heading.title:
                heading.anchor = slugger.slug(heading.title)
