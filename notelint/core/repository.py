"""
노트 저장소 탐색 및 분석
주제 폴더와 마크다운 문서를 찾아 파싱하고, 질문 항목과 목차를 추출합니다.
"""

import fnmatch
import logging
from pathlib import Path
from typing import List, Dict, Any, Optional, Iterator

from tqdm import tqdm

from ..models.document import LinkKind, MarkdownDocument
from ..models.question import QuestionEntry, TopicFolder
from ..models.toc import TOCEntry
from .config import Config
from .parser import MarkdownParser

# 로깅 설정
logger = logging.getLogger(__name__)


class NotesRepository:
    """마크다운 노트 저장소를 나타내는 메인 클래스"""

    def __init__(
        self,
        root: Optional[str] = None,
        config: Optional[Config] = None,
        show_progress: Optional[bool] = None,
    ):
        """
        노트 저장소를 초기화합니다.

        Args:
            root: 저장소 루트 경로 (기본값: 설정의 NOTES_ROOT)
            config: 설정 인스턴스
            show_progress: 파일 로딩 진행률 표시 여부

        Raises:
            FileNotFoundError: 루트 디렉터리가 없는 경우
        """
        self.config = config or Config()
        self.root = Path(root or self.config.notes_root).resolve()
        self.show_progress = (
            self.config.SHOW_PROGRESS if show_progress is None else show_progress
        )
        self.parser = MarkdownParser()
        self.documents: Dict[Path, MarkdownDocument] = {}
        self.load_errors: Dict[Path, str] = {}
        self._loaded = False

        if not self.root.is_dir():
            logger.error(f"노트 저장소 루트를 찾을 수 없습니다: {self.root}")
            raise FileNotFoundError(f"노트 저장소 루트를 찾을 수 없습니다: {self.root}")

        logger.info(f"노트 저장소 초기화: {self.root}")

    def relative(self, path: Path) -> str:
        """루트 기준 상대 경로 (POSIX 형식)"""
        try:
            return Path(path).resolve().relative_to(self.root).as_posix()
        except ValueError:
            return Path(path).as_posix()

    def is_markdown(self, path: Path) -> bool:
        return path.suffix.lower() in self.config.markdown_extensions

    def is_ignored(self, path: Path) -> bool:
        """무시 패턴에 해당하는 경로인지 확인합니다."""
        relative = self.relative(path)
        for pattern in self.config.IGNORE_PATTERNS:
            if fnmatch.fnmatch(relative, pattern):
                return True
            if any(fnmatch.fnmatch(part, pattern) for part in Path(relative).parts):
                return True
        return False

    def discover_files(self) -> List[Path]:
        """
        저장소의 마크다운 파일을 찾습니다.

        Returns:
            정렬된 마크다운 파일 경로 리스트
        """
        files = [
            path
            for path in self.root.rglob("*")
            if path.is_file() and self.is_markdown(path) and not self.is_ignored(path)
        ]
        files.sort(key=lambda p: self.relative(p))
        logger.info(f"총 {len(files)}개의 마크다운 파일을 찾았습니다.")
        return files

    def load(self) -> Dict[Path, MarkdownDocument]:
        """
        모든 마크다운 파일을 파싱합니다.

        읽을 수 없는 파일은 load_errors에 기록하고 계속 진행합니다.

        Returns:
            경로별 파싱된 문서
        """
        files = self.discover_files()

        for file_path in tqdm(files, desc="문서 파싱", disable=not self.show_progress):
            self._load_file(file_path)

        self._loaded = True
        if self.load_errors:
            logger.warning(f"{len(self.load_errors)}개 파일을 읽지 못했습니다.")
        logger.info(f"{len(self.documents)}개 문서를 파싱했습니다.")
        return self.documents

    def _load_file(self, file_path: Path) -> Optional[MarkdownDocument]:
        file_path = file_path.resolve()
        try:
            document = self.parser.parse_file(file_path)
        except UnicodeDecodeError as e:
            self.load_errors[file_path] = f"UTF-8로 디코딩할 수 없습니다: {e.reason}"
            return None
        except OSError as e:
            self.load_errors[file_path] = f"파일을 읽을 수 없습니다: {e}"
            return None

        self.documents[file_path] = document
        return document

    def ensure_loaded(self):
        if not self._loaded:
            self.load()

    def get_document(self, path: Path) -> Optional[MarkdownDocument]:
        """
        경로에 해당하는 문서를 반환합니다. 캐시에 없으면 파싱합니다.

        Args:
            path: 문서 경로

        Returns:
            문서 또는 None (없거나 읽을 수 없는 경우)
        """
        path = Path(path).resolve()
        if path in self.documents:
            return self.documents[path]
        if path in self.load_errors or not path.is_file():
            return None
        return self._load_file(path)

    def iter_documents(self) -> Iterator[MarkdownDocument]:
        self.ensure_loaded()
        for path in sorted(self.documents, key=self.relative):
            yield self.documents[path]

    def root_index(self) -> Optional[Path]:
        """루트 인덱스 파일 (README) 경로를 반환합니다."""
        return self.find_index(self.root)

    def find_index(self, directory: Path) -> Optional[Path]:
        wanted = self.config.index_file_name.lower()
        for path in sorted(directory.iterdir()):
            if path.is_file() and path.name.lower() == wanted:
                return path.resolve()
        return None

    def topic_folders(self) -> List[TopicFolder]:
        """
        루트 바로 아래의 주제 폴더들을 반환합니다.

        Returns:
            마크다운 파일이 있는 주제 폴더 리스트
        """
        files = self.discover_files()
        topics = []

        for directory in sorted(p for p in self.root.iterdir() if p.is_dir()):
            if self.is_ignored(directory):
                continue

            topic_files = [f for f in files if directory in f.parents]
            if not topic_files:
                continue

            readme = self.find_index(directory)
            topics.append(
                TopicFolder(
                    name=directory.name,
                    path=directory.resolve(),
                    readme=readme,
                    content_files=[f.resolve() for f in topic_files if f.resolve() != readme],
                )
            )

        logger.debug(f"{len(topics)}개의 주제 폴더를 찾았습니다.")
        return topics

    def extract_questions(self, document: MarkdownDocument) -> List[QuestionEntry]:
        """
        문서에서 질문 항목을 추출합니다.

        QUESTION_MIN_LEVEL 이상의 헤딩마다 다음 헤딩 전까지의 본문을 답변으로
        묶습니다. 답변과 코드가 모두 없는 헤딩은 제외합니다.

        Args:
            document: 파싱된 문서

        Returns:
            질문 항목 리스트
        """
        lines = document.text.splitlines()
        code_lines = set()
        for block in document.code_blocks:
            code_lines.update(range(block.line, block.end_line + 1))

        file_path = self.relative(document.path) if document.path else ""
        entries = []
        current_hierarchy: List[Dict[str, Any]] = []

        for i, heading in enumerate(document.headings):
            hierarchy_entry = {"level": heading.level, "title": heading.title}
            current_hierarchy = [
                h for h in current_hierarchy if h["level"] < heading.level
            ] + [hierarchy_entry]

            if heading.level < self.config.QUESTION_MIN_LEVEL or not heading.title:
                continue

            # 다음 헤딩 직전까지가 답변 범위
            start = heading.end_line + 1
            if i + 1 < len(document.headings):
                end = document.headings[i + 1].line - 1
            else:
                end = len(lines)

            answer_lines = [
                lines[n - 1] for n in range(start, end + 1) if n not in code_lines
            ]
            answer = "\n".join(answer_lines).strip()
            code_blocks = [b for b in document.code_blocks if start <= b.line <= end]

            if not answer and not code_blocks:
                continue

            entries.append(
                QuestionEntry(
                    title=heading.title,
                    level=heading.level,
                    anchor=heading.anchor,
                    file_path=file_path,
                    line=heading.line,
                    answer=answer,
                    code_blocks=code_blocks,
                    hierarchy=list(current_hierarchy),
                )
            )

        logger.debug(f"{file_path}: 질문 항목 {len(entries)}개 추출")
        return entries

    def iter_questions(self, topic: Optional[str] = None) -> Iterator[QuestionEntry]:
        """
        저장소 전체의 질문 항목을 파일 순서대로 반환합니다.

        Args:
            topic: 주제 폴더 이름 필터 (대소문자 무시)
        """
        for document in self.iter_documents():
            for entry in self.extract_questions(document):
                if topic is None or (entry.topic or "").lower() == topic.lower():
                    yield entry

    def extract_toc(self, document: MarkdownDocument) -> List[TOCEntry]:
        """
        문서의 목차(리스트 항목 안의 내부 링크)를 계층 구조와 함께 추출합니다.

        Args:
            document: 파싱된 문서

        Returns:
            목차 항목 리스트
        """
        toc_entries = []
        current_hierarchy: List[Dict[str, Any]] = []
        indents: List[int] = []

        for link in document.links:
            if not link.in_list or link.kind == LinkKind.EXTERNAL or link.is_image:
                continue

            # 들여쓰기 깊이로 레벨 계산
            while indents and indents[-1] > link.indent:
                indents.pop()
            if not indents or indents[-1] < link.indent:
                indents.append(link.indent)
            level = len(indents) - 1

            hierarchy_entry = {"level": level, "title": link.text}
            current_hierarchy = current_hierarchy[:level] + [hierarchy_entry]

            toc_entries.append(
                TOCEntry(
                    title=link.text,
                    level=level,
                    file_path=link.path,
                    hierarchy=list(current_hierarchy),
                    anchor=link.fragment,
                    line=link.line,
                )
            )

        return toc_entries

    def stats(self) -> Dict[str, Any]:
        """저장소 통계를 반환합니다."""
        self.ensure_loaded()

        stats: Dict[str, Any] = {
            "file_count": len(self.documents),
            "topic_count": len(self.topic_folders()),
            "heading_count": 0,
            "question_count": 0,
            "code_block_count": 0,
            "code_blocks_without_language": 0,
            "links": {kind.value: 0 for kind in LinkKind},
            "load_error_count": len(self.load_errors),
        }

        for document in self.iter_documents():
            stats["heading_count"] += len(document.headings)
            stats["question_count"] += len(self.extract_questions(document))
            stats["code_block_count"] += len(document.code_blocks)
            stats["code_blocks_without_language"] += sum(
                1 for block in document.code_blocks if not block.has_language
            )
            for link in document.links:
                stats["links"][link.kind.value] += 1

        return stats
