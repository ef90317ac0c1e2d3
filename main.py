#!/usr/bin/env python3
"""
마크다운 노트 저장소 검사 및 탐색 도구 통합 실행 스크립트
"""

import sys
import json
import argparse
import logging
from pathlib import Path

from notelint import (
    Config,
    validate_config,
    NotesRepository,
    NotesLinter,
    QuestionSearch,
    SearchType,
    RULES,
    build_toc,
    render_toc,
    update_toc,
    format_search_results,
    format_lint_report,
    format_hierarchy_path,
    interactive_result_viewer,
)
from notelint.core.parser import MarkdownParser
from notelint.utils.format import format_stats, format_toc_entries

logger = logging.getLogger(__name__)


def setup_logging(config: Config):
    """로깅 설정"""
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def load_repository(args, config: Config) -> NotesRepository:
    show_progress = config.SHOW_PROGRESS and not getattr(args, "no_progress", False)
    repository = NotesRepository(
        root=args.root, config=config, show_progress=show_progress
    )
    repository.load()
    return repository


def lint_command(args, config: Config):
    """저장소 검사 명령"""
    try:
        repository = load_repository(args, config)
        disabled = set(config.disabled_rules) | set(args.disable or [])
        linter = NotesLinter(repository, disabled_rules=disabled)
        report = linter.lint()
    except Exception as e:
        logger.error(f"저장소 검사 중 오류 발생: {e}")
        return 1

    print(f"🔎 노트 저장소 검사: {repository.root}")
    print(format_lint_report(report, show_info=args.show_info))

    if report.has_failures(strict=args.strict):
        print("❌ 검사에 실패했습니다.")
    else:
        print("✅ 검사를 통과했습니다.")
    return report.exit_code(strict=args.strict)


def toc_command(args, config: Config):
    """목차 생성/갱신 명령"""
    min_level = args.min_level or config.TOC_MIN_LEVEL
    max_level = args.max_level or config.TOC_MAX_LEVEL
    file_path = Path(args.file)

    try:
        if not file_path.is_file():
            print(f"❌ 파일을 찾을 수 없습니다: {file_path}")
            return 1

        text = file_path.read_text(encoding="utf-8")

        if args.write:
            new_text, changed = update_toc(text, min_level, max_level)
            if changed:
                file_path.write_text(new_text, encoding="utf-8")
                print(f"✅ 목차를 갱신했습니다: {file_path}")
            else:
                print(f"ℹ️  변경 사항이 없습니다 (<!-- toc --> 표시 필요): {file_path}")
            return 0

        document = MarkdownParser().parse(text, path=file_path)
        print(render_toc(build_toc(document, min_level, max_level)))

    except Exception as e:
        logger.error(f"목차 생성 중 오류 발생: {e}")
        return 1
    return 0


def links_command(args, config: Config):
    """문서에 있는 목차 링크 트리 표시 명령"""
    try:
        repository = NotesRepository(root=args.root, config=config, show_progress=False)
        document = repository.get_document(Path(args.file))
        if document is None:
            print(f"❌ 문서를 읽을 수 없습니다: {args.file}")
            return 1
        print(format_toc_entries(repository.extract_toc(document)))
    except Exception as e:
        logger.error(f"목차 추출 중 오류 발생: {e}")
        return 1
    return 0


def questions_command(args, config: Config):
    """질문 항목 목록 명령"""
    try:
        repository = load_repository(args, config)
        entries = list(repository.iter_questions(topic=args.topic))
    except Exception as e:
        logger.error(f"질문 항목 추출 중 오류 발생: {e}")
        return 1

    if not entries:
        print("질문 항목이 없습니다.")
        return 0

    current_file = None
    for entry in entries:
        if entry.file_path != current_file:
            current_file = entry.file_path
            print(f"\n📄 {current_file}")
        marker = "❓" if entry.is_question else "•"
        print(f"  {marker} {entry.title} (#{entry.anchor}, {entry.line}번째 줄)")
        if args.verbose:
            print(f"      📍 {format_hierarchy_path(entry.hierarchy)}")

    print(f"\n총 {len(entries)}개 질문 항목")
    return 0


def search_command(args, config: Config):
    """검색 명령"""
    try:
        repository = load_repository(args, config)
        search_system = QuestionSearch(repository)

        hierarchy_filter = None
        if args.hierarchy_filter:
            hierarchy_filter = json.loads(args.hierarchy_filter)

        results = search_system.search(
            query=args.query,
            search_type=SearchType(args.search_type),
            limit=args.limit or config.DEFAULT_SEARCH_LIMIT,
            topic_filter=args.topic,
            hierarchy_filter=hierarchy_filter,
        )

        if not results:
            print("🔍 검색 결과가 없습니다.")
            return 0

        print(f"🔍 검색 결과 ({len(results)}개):")
        print("=" * 80)

        # 대화형 모드
        if args.interactive:
            interactive_result_viewer(results)
        else:
            print(
                format_search_results(
                    results,
                    show_full_content=args.full_content,
                    show_detailed_scores=args.detailed_scores,
                )
            )

    except Exception as e:
        logger.error(f"검색 중 오류 발생: {e}")
        return 1
    return 0


def stats_command(args, config: Config):
    """저장소 통계 명령"""
    try:
        repository = load_repository(args, config)
        print(format_stats(repository.stats()))

        topics = repository.topic_folders()
        if topics:
            print("\n📁 주제 폴더:")
            for topic in topics:
                readme = "README 있음" if topic.has_readme else "README 없음"
                print(f"   - {topic.name}: 파일 {len(topic.content_files)}개, {readme}")
    except Exception as e:
        logger.error(f"통계 조회 중 오류 발생: {e}")
        return 1
    return 0


def config_command(args, config: Config):
    """설정 출력 명령"""
    config.print_config()
    print("\n사용 가능한 검사 규칙:")
    for rule, severity in sorted(RULES.items()):
        print(f"  {rule} ({severity.value})")
    return 0


def _print_question_stats(search_system: QuestionSearch):
    stats = search_system.get_stats()
    print("📊 질문 항목 통계:")
    print(f"   - 총 질문 항목 수: {stats['question_count']:,}")
    print(f"   - 물음표로 끝나는 질문: {stats['explicit_question_count']:,}")
    print(f"   - 평균 답변 길이: {stats['avg_answer_length']:.0f}자")
    for topic, count in sorted(stats["questions_by_topic"].items()):
        print(f"   - {topic}: {count:,}")


def interactive_search(args, config: Config):
    """대화형 검색 모드"""
    try:
        repository = load_repository(args, config)
        search_system = QuestionSearch(repository)
    except Exception as e:
        logger.error(f"대화형 검색 모드 실행 중 오류 발생: {e}")
        return 1

    state = {"type": SearchType.HYBRID, "viewer": False}

    def toggle_viewer(_):
        state["viewer"] = not state["viewer"]
        print(f"🎮 대화형 뷰어: {'켜짐' if state['viewer'] else '꺼짐'}")

    def set_type(value):
        try:
            state["type"] = SearchType(value)
        except ValueError:
            print(f"❗ 검색 타입은 {', '.join(t.value for t in SearchType)} 중 하나입니다.")
            return
        print(f"🔧 검색 타입: {state['type'].value}")

    def show_help(_):
        print("🔍 검색어를 입력하면 질문 항목을 검색합니다.")
        print("  !stats          질문 항목 통계")
        print("  !type <유형>    검색 타입 변경 (title, keyword, hybrid)")
        print("  !interactive    대화형 뷰어 켜기/끄기")
        print("  !help           도움말")
        print("  exit, quit      종료")

    special_commands = {
        "!stats": lambda _: _print_question_stats(search_system),
        "!type": set_type,
        "!interactive": toggle_viewer,
        "!help": show_help,
    }

    print("🔍 대화형 검색 모드")
    show_help(None)
    print("=" * 50)

    while True:
        try:
            query = input(f"\n[{state['type'].value}] 검색어: ").strip()
        except (KeyboardInterrupt, EOFError):
            print()
            break

        if not query or query.lower() in ("exit", "quit"):
            break

        if query.startswith("!"):
            name, _, value = query.partition(" ")
            handler = special_commands.get(name)
            if handler is None:
                print("❓ 알 수 없는 명령어입니다. !help를 참조하세요.")
            else:
                handler(value.strip())
            continue

        results = search_system.search(
            query=query,
            search_type=state["type"],
            limit=config.DEFAULT_SEARCH_LIMIT,
        )
        if not results:
            print("   검색 결과가 없습니다.")
        elif state["viewer"]:
            interactive_result_viewer(results)
        else:
            print(f"   {len(results)}개의 결과를 찾았습니다.")
            print(format_search_results(results))

    print("👋 검색을 종료합니다.")
    return 0


def create_parser():
    """명령행 인수 파서 생성"""
    parser = argparse.ArgumentParser(
        prog="notelint",
        description="마크다운 노트 저장소 검사 및 탐색 도구",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예제:
  # 저장소 전체 검사 (경고도 실패로 처리)
  notelint lint --root ./notes --strict

  # 목차 생성 / <!-- toc --> 영역 갱신
  notelint toc Laravel/Interview_Questions.md
  notelint toc Laravel/Interview_Questions.md --write

  # 질문 항목 검색
  notelint search "미들웨어" --search-type hybrid --topic Laravel

  # 대화형 검색
  notelint interactive
        """,
    )

    root_parser = argparse.ArgumentParser(add_help=False)
    root_parser.add_argument(
        "--root", "-r", default=None, help="노트 저장소 루트 (기본값: NOTES_ROOT)"
    )
    root_parser.add_argument(
        "--no-progress", action="store_true", help="진행률 표시 끄기"
    )

    subparsers = parser.add_subparsers(dest="command", help="사용 가능한 명령어")

    # lint 명령
    lint_parser = subparsers.add_parser(
        "lint", parents=[root_parser], help="저장소 검사"
    )
    lint_parser.add_argument(
        "--disable",
        action="append",
        choices=sorted(RULES),
        metavar="RULE",
        help="비활성화할 규칙 (여러 번 지정 가능)",
    )
    lint_parser.add_argument(
        "--strict", action="store_true", help="경고가 있어도 실패로 처리"
    )
    lint_parser.add_argument(
        "--show-info", action="store_true", help="정보 수준 문제도 표시"
    )

    # toc 명령
    toc_parser = subparsers.add_parser("toc", help="목차 생성 또는 갱신")
    toc_parser.add_argument("file", help="대상 마크다운 파일")
    toc_parser.add_argument("--min-level", type=int, help="최소 헤딩 레벨")
    toc_parser.add_argument("--max-level", type=int, help="최대 헤딩 레벨")
    toc_parser.add_argument(
        "--write", action="store_true", help="<!-- toc --> 영역을 갱신하여 저장"
    )

    # links 명령
    links_parser = subparsers.add_parser(
        "links", parents=[root_parser], help="문서의 목차 링크 트리 표시"
    )
    links_parser.add_argument("file", help="대상 마크다운 파일")

    # questions 명령
    questions_parser = subparsers.add_parser(
        "questions", parents=[root_parser], help="질문 항목 목록"
    )
    questions_parser.add_argument("--topic", help="주제 폴더 필터")
    questions_parser.add_argument(
        "--verbose", "-v", action="store_true", help="계층 구조 표시"
    )

    # search 명령
    search_parser = subparsers.add_parser(
        "search", parents=[root_parser], help="질문 항목 검색"
    )
    search_parser.add_argument("query", help="검색 질의")
    search_parser.add_argument(
        "--search-type",
        choices=[t.value for t in SearchType],
        default="hybrid",
        help="검색 타입 (기본값: hybrid)",
    )
    search_parser.add_argument(
        "--limit", type=int, default=None, help="검색 결과 개수 (기본값: DEFAULT_SEARCH_LIMIT)"
    )
    search_parser.add_argument("--topic", help="주제 폴더 필터")
    search_parser.add_argument(
        "--hierarchy-filter", type=str, help="계층 구조 필터 (JSON 형식)"
    )
    search_parser.add_argument(
        "--full-content", action="store_true", help="전체 답변 표시"
    )
    search_parser.add_argument(
        "--detailed-scores", action="store_true", help="상세 점수 정보 표시"
    )
    search_parser.add_argument(
        "--interactive", action="store_true", help="대화형 결과 뷰어 사용"
    )

    # stats / config / interactive 명령
    subparsers.add_parser("stats", parents=[root_parser], help="저장소 통계")
    subparsers.add_parser("config", help="현재 설정 출력")
    subparsers.add_parser("interactive", parents=[root_parser], help="대화형 검색 모드")

    return parser


COMMANDS = {
    "lint": lint_command,
    "toc": toc_command,
    "links": links_command,
    "questions": questions_command,
    "search": search_command,
    "stats": stats_command,
    "config": config_command,
    "interactive": interactive_search,
}


def main(argv=None):
    """메인 함수"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = Config()
    setup_logging(config)

    try:
        validate_config(config)
    except ValueError as e:
        print(f"⚠️ {e}")
        print("설정을 확인하고 다시 시도하세요.")
        return 1

    return COMMANDS[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
