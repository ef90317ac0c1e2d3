"""
notelint - 마크다운 노트 저장소 검사 및 탐색 도구

주제 폴더별 마크다운 노트(면접 질문 정리 등)를 읽어 목차 링크, 앵커, 코드 블록을
검사하고, 목차를 생성하며, 질문 항목을 검색할 수 있게 해 주는 패키지입니다.
"""

__version__ = "0.1.0"
__author__ = "notelint Team"

# Core classes and functions
from .core.config import Config, validate_config
from .core.parser import MarkdownParser
from .core.repository import NotesRepository
from .core.linter import NotesLinter, RULES
from .core.toc import build_toc, render_toc, update_toc
from .core.search import QuestionSearch, SearchType, SearchResult

# Data models
from .models.toc import TOCEntry
from .models.document import MarkdownDocument, Heading, CodeBlock, Link, LinkKind
from .models.question import QuestionEntry, TopicFolder
from .models.issue import LintIssue, LintReport, Severity

# Utilities
from .utils.format import (
    format_search_results,
    format_lint_report,
    format_hierarchy_path,
    interactive_result_viewer,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Core classes
    "Config",
    "MarkdownParser",
    "NotesRepository",
    "NotesLinter",
    "QuestionSearch",
    "SearchType",
    "SearchResult",
    "RULES",
    # Functions
    "validate_config",
    "build_toc",
    "render_toc",
    "update_toc",
    # Data models
    "TOCEntry",
    "MarkdownDocument",
    "Heading",
    "CodeBlock",
    "Link",
    "LinkKind",
    "QuestionEntry",
    "TopicFolder",
    "LintIssue",
    "LintReport",
    "Severity",
    # Utilities
    "format_search_results",
    "format_lint_report",
    "format_hierarchy_path",
    "interactive_result_viewer",
]
