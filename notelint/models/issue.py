"""Lint issue and report data models."""

from typing import List, Dict
from dataclasses import dataclass, field
from enum import Enum


class Severity(Enum):
    """검사 결과 심각도 열거형"""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class LintIssue:
    """검사 규칙 하나가 보고한 문제"""

    rule: str
    severity: Severity
    file_path: str
    line: int
    message: str


@dataclass
class LintReport:
    """저장소 전체 검사 결과"""

    issues: List[LintIssue] = field(default_factory=list)
    files_checked: int = 0

    @property
    def errors(self) -> List[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def infos(self) -> List[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.INFO]

    def by_rule(self) -> Dict[str, int]:
        """규칙별 문제 개수"""
        counts: Dict[str, int] = {}
        for issue in self.issues:
            counts[issue.rule] = counts.get(issue.rule, 0) + 1
        return counts

    def by_file(self) -> Dict[str, List[LintIssue]]:
        """파일별 문제 목록"""
        grouped: Dict[str, List[LintIssue]] = {}
        for issue in self.issues:
            grouped.setdefault(issue.file_path, []).append(issue)
        return grouped

    def has_failures(self, strict: bool = False) -> bool:
        if self.errors:
            return True
        return strict and bool(self.warnings)

    def exit_code(self, strict: bool = False) -> int:
        return 1 if self.has_failures(strict) else 0
