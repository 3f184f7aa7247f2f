"""
녹취록 PII 마스킹 CLI

텍스트 파일(또는 표준 입력)을 읽어 마스킹된 텍스트를 표준 출력으로 내보냅니다.
리포트는 JSON으로 표준 에러에 출력되어 파이프라인에서 본문과 섞이지 않습니다.

사용법:
    # 파일 마스킹
    pii-mask interview.txt > interview.masked.txt

    # 표준 입력
    cat interview.txt | pii-mask

    # 이름은 HIGH 신뢰도만, 전화번호/이메일만 마스킹
    pii-mask interview.txt --min-confidence high --categories phone,email,person_name

    # 탐지 리포트 + 품질 검증 결과
    pii-mask interview.txt --report --validate

종료 코드:
    0: 성공
    2: 입력/설정 오류
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from .lib.errors import ConfigError, InvalidInputError
from .modules.core.privacy import PIIProcessor, RedactionOptions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pii-mask",
        description="한국어 인터뷰 녹취록 개인정보 마스킹",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예시:
  pii-mask interview.txt
  pii-mask interview.txt --min-confidence high --report
  cat interview.txt | pii-mask --categories phone,email
        """,
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="UTF-8 텍스트 파일 경로 (생략 시 표준 입력)",
    )
    parser.add_argument(
        "--min-confidence",
        type=str,
        default=None,
        choices=["high", "medium", "low"],
        help="이름 마스킹 최소 신뢰도 (기본값: 설정 파일, 없으면 medium)",
    )
    parser.add_argument(
        "--categories",
        type=str,
        default=None,
        help="마스킹할 카테고리 (쉼표 구분, 예: phone,email,person_name)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="privacy.yaml 경로 (기본값: PII_MASKING_CONFIG 또는 패키지 기본 설정)",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="탐지 리포트를 JSON으로 표준 에러에 출력",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="품질 검증 결과를 리포트에 포함",
    )
    return parser


def _read_input(path: str | None) -> str:
    if path is None:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _build_options(args: argparse.Namespace, processor: PIIProcessor) -> RedactionOptions:
    config = processor.config
    categories = (
        [name for name in args.categories.split(",") if name.strip()]
        if args.categories
        else config.enabled_categories
    )
    return RedactionOptions.create(
        enabled_categories=categories,
        min_name_confidence=args.min_confidence or config.min_name_confidence,
    )


def main(argv: list[str] | None = None) -> int:
    """메인 함수 (종료 코드 반환)"""
    args = build_parser().parse_args(argv)

    try:
        processor = PIIProcessor(config_path=args.config)
        options = _build_options(args, processor)
        text = _read_input(args.file)
    except (ConfigError, InvalidInputError) as e:
        print(json.dumps(e.to_dict(), ensure_ascii=False), file=sys.stderr)
        return 2
    except (OSError, UnicodeDecodeError) as e:
        print(f"입력 파일을 읽을 수 없습니다: {e}", file=sys.stderr)
        return 2

    result = processor.process(text, options=options)
    sys.stdout.write(result.masked_text)

    if args.report or args.validate:
        report: dict[str, Any] = {
            "counts": result.counts,
            "total_masked_count": result.total_masked_count,
            "processing_time_ms": round(result.processing_time_ms, 3),
        }
        if args.validate and result.validation is not None:
            report["validation"] = result.validation.to_dict()
        print(json.dumps(report, ensure_ascii=False, indent=2), file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
