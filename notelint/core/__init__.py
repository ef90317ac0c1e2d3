"""Core functionality for notelint package."""

from .config import Config, validate_config
from .anchors import Slugger, github_slug, strip_inline_markup
from .parser import MarkdownParser, classify_target
from .repository import NotesRepository
from .linter import NotesLinter, RULES
from .toc import build_toc, render_toc, find_toc_region, update_toc, is_toc_stale
from .search import QuestionSearch, SearchType, SearchResult

__all__ = [
    "Config",
    "validate_config",
    "Slugger",
    "github_slug",
    "strip_inline_markup",
    "MarkdownParser",
    "classify_target",
    "NotesRepository",
    "NotesLinter",
    "RULES",
    "build_toc",
    "render_toc",
    "find_toc_region",
    "update_toc",
    "is_toc_stale",
    "QuestionSearch",
    "SearchType",
    "SearchResult",
]
