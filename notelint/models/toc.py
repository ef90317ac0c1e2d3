"""TOC (Table of Contents) related data models."""

from typing import List, Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class TOCEntry:
    """목차 항목을 나타내는 데이터 클래스"""

    title: str
    level: int
    file_path: str
    hierarchy: List[Dict[str, Any]]
    anchor: Optional[str] = None
    line: Optional[int] = None

    @property
    def target(self) -> str:
        """링크 대상 (파일 경로 + 앵커)"""
        if self.anchor is None:
            return self.file_path
        return f"{self.file_path}#{self.anchor}"
