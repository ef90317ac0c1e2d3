"""
검사 결과, 검색 결과 포맷팅 및 대화형 뷰어 유틸리티
"""

import json
from typing import List, Dict, Any

from ..core.search import SearchResult
from ..models.issue import LintReport, Severity
from ..models.toc import TOCEntry

SEVERITY_BADGES = {
    Severity.ERROR: "❌",
    Severity.WARNING: "⚠️ ",
    Severity.INFO: "ℹ️ ",
}


def format_hierarchy_path(hierarchy: List[Dict[str, Any]]) -> str:
    """
    계층 구조를 경로 형태로 포맷팅합니다.

    Args:
        hierarchy: 계층 구조 정보

    Returns:
        포맷팅된 계층 경로
    """
    if not hierarchy:
        return "알 수 없음"

    path_parts = [level_info["title"] for level_info in hierarchy if "title" in level_info]
    return " > ".join(path_parts) if path_parts else "알 수 없음"


def format_detailed_hierarchy(hierarchy: List[Dict[str, Any]]) -> str:
    """
    계층 구조를 상세하게 포맷팅합니다.

    Args:
        hierarchy: 계층 구조 정보

    Returns:
        상세 포맷팅된 계층 구조
    """
    if not hierarchy:
        return "계층 정보 없음"

    result = ["📖 헤딩 계층:"]
    for depth, level_info in enumerate(hierarchy):
        level = level_info.get("level", 0)
        title = level_info.get("title", "제목 없음")
        result.append(f"{'  ' * depth}├─ 레벨 {level}: {title}")
    return "\n".join(result)


def format_search_results(
    results: List[SearchResult],
    show_hierarchy: bool = True,
    show_full_content: bool = False,
    max_content_length: int = 200,
    show_detailed_scores: bool = True,
) -> str:
    """
    검색 결과를 포맷팅합니다.

    Args:
        results: 검색 결과 리스트
        show_hierarchy: 계층 구조 표시 여부
        show_full_content: 전체 답변 표시 여부
        max_content_length: 최대 답변 길이
        show_detailed_scores: 상세 점수 정보 표시 여부

    Returns:
        포맷팅된 검색 결과 문자열
    """
    if not results:
        return "검색 결과가 없습니다."

    formatted_results = []

    for i, result in enumerate(results, 1):
        entry = result.entry
        result_lines = []

        # 헤더
        result_lines.append(f"📄 결과 {i}: {entry.title}")
        result_lines.append(f"🔗 {entry.file_path}#{entry.anchor} ({entry.line}번째 줄)")
        result_lines.append("=" * 50)

        # 점수 정보
        if show_detailed_scores:
            score_info = f"🎯 전체 점수: {result.score:.4f}"
            if result.search_type == "hybrid":
                if result.title_score is not None:
                    score_info += f" | 제목: {result.title_score:.4f}"
                if result.content_score is not None:
                    score_info += f" | 본문: {result.content_score:.4f}"
            result_lines.append(score_info)

        # 계층 구조
        if show_hierarchy:
            result_lines.append(f"📍 위치: {format_hierarchy_path(result.hierarchy)}")

        # 답변
        content = entry.answer
        if not show_full_content and len(content) > max_content_length:
            content = content[:max_content_length] + "..."

        result_lines.append("📝 답변:")
        result_lines.append(content)

        if entry.code_blocks:
            languages = sorted({b.language or "없음" for b in entry.code_blocks})
            result_lines.append(
                f"ℹ️  코드 블록 {len(entry.code_blocks)}개 (언어: {', '.join(languages)})"
            )

        result_lines.append("")  # 빈 줄
        formatted_results.append("\n".join(result_lines))

    return "\n".join(formatted_results)


def format_lint_report(report: LintReport, show_info: bool = False) -> str:
    """
    검사 보고서를 파일별로 포맷팅합니다.

    Args:
        report: 검사 보고서
        show_info: INFO 수준 문제 표시 여부

    Returns:
        포맷팅된 보고서 문자열
    """
    lines = []

    for file_path, issues in report.by_file().items():
        visible = [i for i in issues if show_info or i.severity != Severity.INFO]
        if not visible:
            continue
        lines.append(f"📄 {file_path}")
        for issue in visible:
            badge = SEVERITY_BADGES[issue.severity]
            lines.append(f"  {badge} {issue.line}: [{issue.rule}] {issue.message}")
        lines.append("")

    lines.append(
        f"검사한 파일 {report.files_checked}개: 오류 {len(report.errors)}개, "
        f"경고 {len(report.warnings)}개, 정보 {len(report.infos)}개"
    )

    rule_counts = report.by_rule()
    if rule_counts:
        lines.append(
            "규칙별: "
            + ", ".join(f"{rule} {count}" for rule, count in sorted(rule_counts.items()))
        )

    return "\n".join(lines)


def format_toc_entries(entries: List[TOCEntry]) -> str:
    """추출한 목차 항목을 들여쓰기된 트리로 포맷팅합니다."""
    if not entries:
        return "목차 항목이 없습니다."

    lines = []
    for entry in entries:
        target = entry.target or "(빈 링크)"
        lines.append(f"{'  ' * entry.level}├─ {entry.title} → {target}")
    return "\n".join(lines)


def format_stats(stats: Dict[str, Any]) -> str:
    """저장소 통계를 포맷팅합니다."""
    links = stats.get("links", {})
    lines = [
        "📊 노트 저장소 통계:",
        f"   - 마크다운 파일: {stats.get('file_count', 0):,}개",
        f"   - 주제 폴더: {stats.get('topic_count', 0):,}개",
        f"   - 헤딩: {stats.get('heading_count', 0):,}개",
        f"   - 질문 항목: {stats.get('question_count', 0):,}개",
        f"   - 코드 블록: {stats.get('code_block_count', 0):,}개 "
        f"(언어 태그 없음 {stats.get('code_blocks_without_language', 0):,}개)",
        f"   - 링크: 앵커 {links.get('anchor', 0):,}개, 파일 {links.get('file', 0):,}개, "
        f"외부 {links.get('external', 0):,}개",
    ]
    if stats.get("load_error_count"):
        lines.append(f"   - 읽기 실패: {stats['load_error_count']:,}개")
    return "\n".join(lines)


class ResultViewer:
    """질문 항목 검색 결과를 한 건씩 넘겨 보는 대화형 뷰어"""

    PREVIEW_LENGTH = 300

    ALIASES = {
        "n": "next",
        "p": "prev",
        "f": "full",
        "c": "code",
        "h": "hier",
        "s": "summary",
        "g": "goto",
        "?": "help",
    }

    def __init__(self, results: List[SearchResult]):
        self.results = results
        self.index = 0

    @property
    def current(self) -> SearchResult:
        return self.results[self.index]

    def show(self):
        entry = self.current.entry
        print("\n" + "=" * 80)
        print(f"📄 [{self.index + 1}/{len(self.results)}] {entry.title}")
        print(f"🔗 {entry.file_path}#{entry.anchor}")
        print("=" * 80)
        print(f"🎯 점수: {self.current.score:.4f} ({self.current.search_type})")
        print(f"📍 위치: {format_hierarchy_path(self.current.hierarchy)}")

        answer = entry.answer
        if len(answer) > self.PREVIEW_LENGTH:
            answer = answer[: self.PREVIEW_LENGTH] + "..."
        print("\n📝 답변 미리보기:")
        print(answer or "(답변 없음)")

        if entry.code_blocks:
            print(f"\nℹ️  코드 블록 {len(entry.code_blocks)}개 ('c'로 보기)")

    def move(self, index: int):
        if not 0 <= index < len(self.results):
            print(f"❗ 1부터 {len(self.results)} 사이의 번호만 가능합니다.")
            return
        self.index = index
        self.show()

    def do_next(self):
        if self.index + 1 >= len(self.results):
            print("❗ 마지막 결과입니다.")
        else:
            self.move(self.index + 1)

    def do_prev(self):
        if self.index == 0:
            print("❗ 첫 번째 결과입니다.")
        else:
            self.move(self.index - 1)

    def do_full(self):
        print(f"\n📄 전체 답변 ({self.current.entry.title}):")
        print("-" * 80)
        print(self.current.entry.answer)
        print("-" * 80)

    def do_code(self):
        blocks = self.current.entry.code_blocks
        if not blocks:
            print("❗ 코드 블록이 없습니다.")
        for block in blocks:
            print(f"\n💻 {block.language or '언어 없음'} ({block.line}번째 줄)")
            print("-" * 80)
            print(block.content)
            print("-" * 80)

    def do_hier(self):
        print()
        print(format_detailed_hierarchy(self.current.hierarchy))

    def do_summary(self):
        scores = [r.score for r in self.results]
        topics: Dict[str, int] = {}
        for result in self.results:
            topic = result.entry.topic or "(root)"
            topics[topic] = topics.get(topic, 0) + 1

        print("\n📈 검색 결과 요약:")
        print(f"   총 결과 수: {len(self.results)}")
        print(f"   점수 범위: {min(scores):.4f} ~ {max(scores):.4f}")
        print(f"   평균 점수: {sum(scores) / len(scores):.4f}")
        print(f"   주제별: {json.dumps(topics, ensure_ascii=False)}")

    def do_goto(self):
        answer = input(f"이동할 결과 번호 (1-{len(self.results)}): ").strip()
        if not answer.isdigit():
            print("❗ 숫자를 입력하세요.")
            return
        self.move(int(answer) - 1)

    def do_help(self):
        print("\n📖 뷰어 명령어:")
        print("  n / p   다음, 이전 결과")
        print("  f       전체 답변")
        print("  c       코드 블록")
        print("  h       헤딩 계층 구조")
        print("  s       결과 요약")
        print("  g       번호로 이동")
        print("  q       종료")

    def run(self):
        print(f"🔍 검색 결과 대화형 뷰어 ({len(self.results)}개 결과)")
        self.do_help()
        self.show()

        while True:
            try:
                command = input("\n명령어 (help: 도움말): ").strip().lower()
                if command in ("q", "quit", "exit"):
                    break

                handler = getattr(self, f"do_{self.ALIASES.get(command, command)}", None)
                if handler is None:
                    print(f"❓ 알 수 없는 명령어입니다: '{command}'")
                    continue
                handler()
            except (KeyboardInterrupt, EOFError):
                print()
                break

        print("👋 뷰어를 종료합니다.")


def interactive_result_viewer(results: List[SearchResult]):
    """
    검색 결과를 대화형으로 탐색할 수 있는 뷰어입니다.

    Args:
        results: 검색 결과 리스트
    """
    if not results:
        print("표시할 검색 결과가 없습니다.")
        return

    ResultViewer(results).run()
