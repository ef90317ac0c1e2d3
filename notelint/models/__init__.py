"""Data models for notelint package."""

from .toc import TOCEntry
from .document import (
    LinkKind,
    Heading,
    CodeBlock,
    Link,
    HtmlAnchor,
    MarkdownDocument,
)
from .question import QuestionEntry, TopicFolder
from .issue import Severity, LintIssue, LintReport

__all__ = [
    "TOCEntry",
    "LinkKind",
    "Heading",
    "CodeBlock",
    "Link",
    "HtmlAnchor",
    "MarkdownDocument",
    "QuestionEntry",
    "TopicFolder",
    "Severity",
    "LintIssue",
    "LintReport",
]
