"""Question entry and topic folder data models."""

from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field
from pathlib import Path

from .document import CodeBlock


@dataclass
class QuestionEntry:
    """헤딩 하나와 그 답변 텍스트, 코드 조각을 묶은 질문 항목"""

    title: str
    level: int
    anchor: str
    file_path: str
    line: int
    answer: str
    code_blocks: List[CodeBlock] = field(default_factory=list)
    hierarchy: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def is_question(self) -> bool:
        return self.title.rstrip().endswith("?")

    @property
    def topic(self) -> Optional[str]:
        """저장소 루트 기준 첫 번째 경로 요소 (루트 파일이면 None)"""
        parts = Path(self.file_path).parts
        if len(parts) > 1:
            return parts[0]
        return None

    @property
    def text(self) -> str:
        """답변과 코드 블록을 합친 검색용 텍스트"""
        code = "\n".join(block.content for block in self.code_blocks)
        return f"{self.answer}\n{code}" if code else self.answer


@dataclass
class TopicFolder:
    """하나의 주제 폴더 (README 인덱스 + 내용 파일들)"""

    name: str
    path: Path
    readme: Optional[Path] = None
    content_files: List[Path] = field(default_factory=list)

    @property
    def has_readme(self) -> bool:
        return self.readme is not None
