"""
노트 저장소 검사기
깨진 링크, 없는 앵커, 중복 헤딩, 언어 태그 없는 코드 블록 등을 찾아냅니다.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from ..models.document import Link, LinkKind, MarkdownDocument
from ..models.issue import LintIssue, LintReport, Severity
from .repository import NotesRepository
from .toc import is_toc_stale

# 로깅 설정
logger = logging.getLogger(__name__)

RULES: Dict[str, Severity] = {
    "broken-file-link": Severity.ERROR,
    "dangling-anchor": Severity.ERROR,
    "ambiguous-anchor": Severity.WARNING,
    "duplicate-anchor": Severity.WARNING,
    "missing-code-language": Severity.WARNING,
    "unclosed-code-fence": Severity.ERROR,
    "empty-heading": Severity.WARNING,
    "stale-toc": Severity.WARNING,
    "unlinked-file": Severity.INFO,
    "read-error": Severity.ERROR,
}


class NotesLinter:
    """노트 저장소 검사기 클래스"""

    def __init__(
        self,
        repository: NotesRepository,
        disabled_rules: Optional[Iterable[str]] = None,
    ):
        """
        검사기를 초기화합니다.

        Args:
            repository: 검사할 노트 저장소
            disabled_rules: 비활성화할 규칙 이름들

        Raises:
            ValueError: 알 수 없는 규칙 이름이 포함된 경우
        """
        self.repository = repository
        if disabled_rules is None:
            disabled_rules = repository.config.disabled_rules
        self.disabled_rules: Set[str] = set(disabled_rules)

        unknown = sorted(self.disabled_rules - set(RULES))
        if unknown:
            logger.error(f"알 수 없는 규칙: {', '.join(unknown)}")
            raise ValueError(
                f"알 수 없는 규칙: {', '.join(unknown)} "
                f"(사용 가능: {', '.join(sorted(RULES))})"
            )

    def is_enabled(self, rule: str) -> bool:
        return rule not in self.disabled_rules

    def _issue(self, rule: str, path: Optional[Path], line: int, message: str) -> LintIssue:
        file_path = self.repository.relative(path) if path else "<text>"
        return LintIssue(
            rule=rule,
            severity=RULES[rule],
            file_path=file_path,
            line=line,
            message=message,
        )

    def lint(self) -> LintReport:
        """
        저장소 전체를 검사합니다.

        Returns:
            검사 결과 보고서
        """
        logger.info(f"저장소 검사 시작: {self.repository.root}")
        self.repository.ensure_loaded()

        issues: List[LintIssue] = []

        if self.is_enabled("read-error"):
            for path, message in self.repository.load_errors.items():
                issues.append(self._issue("read-error", path, 1, message))

        documents = list(self.repository.iter_documents())
        for document in documents:
            issues.extend(self.lint_document(document))

        if self.is_enabled("unlinked-file"):
            issues.extend(self._check_unlinked_files(documents))

        issues.sort(key=lambda i: (i.file_path, i.line, i.rule))
        report = LintReport(issues=issues, files_checked=len(documents))

        logger.info(
            f"검사 완료: 파일 {report.files_checked}개, 오류 {len(report.errors)}개, "
            f"경고 {len(report.warnings)}개"
        )
        return report

    def lint_document(self, document: MarkdownDocument) -> List[LintIssue]:
        """
        문서 하나를 검사합니다.

        Args:
            document: 파싱된 문서

        Returns:
            발견된 문제 리스트
        """
        issues: List[LintIssue] = []
        issues.extend(self._check_headings(document))
        issues.extend(self._check_code_blocks(document))
        issues.extend(self._check_links(document))

        if self.is_enabled("stale-toc") and is_toc_stale(
            document,
            self.repository.config.TOC_MIN_LEVEL,
            self.repository.config.TOC_MAX_LEVEL,
        ):
            issues.append(
                self._issue(
                    "stale-toc",
                    document.path,
                    1,
                    "목차가 현재 헤딩과 다릅니다. 'notelint toc --write'로 갱신하세요.",
                )
            )

        return issues

    def _check_headings(self, document: MarkdownDocument) -> List[LintIssue]:
        issues = []
        first_seen: Dict[str, int] = {}

        for heading in document.headings:
            if not heading.title:
                if self.is_enabled("empty-heading"):
                    issues.append(
                        self._issue(
                            "empty-heading",
                            document.path,
                            heading.line,
                            f"레벨 {heading.level} 헤딩에 텍스트가 없습니다.",
                        )
                    )
                continue

            if heading.slug in first_seen:
                if self.is_enabled("duplicate-anchor"):
                    issues.append(
                        self._issue(
                            "duplicate-anchor",
                            document.path,
                            heading.line,
                            f"헤딩 '{heading.title}'의 앵커 '#{heading.slug}'가 "
                            f"{first_seen[heading.slug]}번째 줄과 중복됩니다 "
                            f"(실제 앵커: '#{heading.anchor}').",
                        )
                    )
            else:
                first_seen[heading.slug] = heading.line
                # 다른 헤딩의 번호 붙은 앵커와 충돌해 접미사가 붙은 경우
                if heading.anchor != heading.slug and self.is_enabled("duplicate-anchor"):
                    issues.append(
                        self._issue(
                            "duplicate-anchor",
                            document.path,
                            heading.line,
                            f"헤딩 '{heading.title}'의 앵커 '#{heading.slug}'가 다른 헤딩의 "
                            f"번호 붙은 앵커와 겹쳐 '#{heading.anchor}'가 됩니다.",
                        )
                    )

        return issues

    def _check_code_blocks(self, document: MarkdownDocument) -> List[LintIssue]:
        issues = []

        for block in document.code_blocks:
            if not block.closed and self.is_enabled("unclosed-code-fence"):
                issues.append(
                    self._issue(
                        "unclosed-code-fence",
                        document.path,
                        block.line,
                        f"'{block.fence}' 코드 블록이 파일 끝까지 닫히지 않았습니다.",
                    )
                )
            if not block.has_language and self.is_enabled("missing-code-language"):
                issues.append(
                    self._issue(
                        "missing-code-language",
                        document.path,
                        block.line,
                        "코드 블록에 언어 태그가 없습니다.",
                    )
                )

        return issues

    def _resolve_link_path(self, document: MarkdownDocument, link: Link) -> Path:
        if link.path.startswith("/"):
            return self.repository.root / link.path.lstrip("/")
        base = document.path.parent if document.path else self.repository.root
        return base / link.path

    def _check_links(self, document: MarkdownDocument) -> List[LintIssue]:
        issues = []

        for link in document.links:
            if link.kind == LinkKind.EXTERNAL:
                continue

            if link.kind == LinkKind.ANCHOR:
                issues.extend(self._check_fragment(document, document, link))
                continue

            target = self._resolve_link_path(document, link)
            if not target.exists():
                if self.is_enabled("broken-file-link"):
                    issues.append(
                        self._issue(
                            "broken-file-link",
                            document.path,
                            link.line,
                            f"링크 대상 파일이 없습니다: '{link.target}'",
                        )
                    )
                continue

            if not link.fragment:
                continue

            if target.is_dir():
                readme = self.repository.find_index(target)
                if readme is None:
                    continue
                target = readme

            if not self.repository.is_markdown(target):
                continue

            target_document = self.repository.get_document(target)
            if target_document is None:
                continue
            issues.extend(self._check_fragment(document, target_document, link))

        return issues

    def _check_fragment(
        self, source: MarkdownDocument, target: MarkdownDocument, link: Link
    ) -> List[LintIssue]:
        fragment = link.fragment or ""
        if not fragment:
            return []

        where = "" if source is target else f" ({self.repository.relative(target.path)})"

        if not target.has_anchor(fragment):
            if self.is_enabled("dangling-anchor"):
                return [
                    self._issue(
                        "dangling-anchor",
                        source.path,
                        link.line,
                        f"앵커 '#{fragment}'를 찾을 수 없습니다{where}.",
                    )
                ]
            return []

        claims = target.anchor_claims(fragment)
        if len(claims) > 1 and self.is_enabled("ambiguous-anchor"):
            return [
                self._issue(
                    "ambiguous-anchor",
                    source.path,
                    link.line,
                    f"앵커 '#{fragment}'가 여러 헤딩을 가리킬 수 있습니다{where}: "
                    + ", ".join(f"'{h.title}' ({h.line}번째 줄)" for h in claims),
                )
            ]
        return []

    def _check_unlinked_files(self, documents: List[MarkdownDocument]) -> List[LintIssue]:
        linked: Set[Path] = set()

        for document in documents:
            for link in document.links:
                if link.kind != LinkKind.FILE or not link.path:
                    continue
                target = self._resolve_link_path(document, link).resolve()
                if target.is_dir():
                    index = self.repository.find_index(target)
                    if index is not None:
                        linked.add(index)
                elif target != document.path:
                    linked.add(target)

        root_index = self.repository.root_index()
        issues = []
        for document in documents:
            if document.path == root_index or document.path in linked:
                continue
            issues.append(
                self._issue(
                    "unlinked-file",
                    document.path,
                    1,
                    "다른 문서에서 이 파일로 연결되는 링크가 없습니다.",
                )
            )
        return issues
