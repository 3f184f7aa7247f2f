"""
개인정보 마스킹 엔진 (RedactionEngine)

인터뷰 녹취록 텍스트에서 개인정보를 찾아 카테고리별 플레이스홀더로 치환합니다.

    "연락처는 010-1234-5678입니다" → "연락처는 [전화번호]입니다"
    "제 이름은 김철수입니다"        → "제 이름은 [이름]입니다"

처리 흐름:
1. 입력 검증 (str이 아니면 InvalidInputError)
2. 활성 카테고리의 탐지 전략 실행 (정형 패턴 → 주소 → 이름)
3. SpanResolver로 겹침 해소
4. 원본 기준 오프셋으로 왼쪽부터 한 번에 치환
5. 치환 결과를 다시 탐지해 새 후보가 없을 때까지 3~4 반복
6. 카테고리/신뢰도별 집계 + 처리 시간 기록

5단계는 마스킹 결과를 다시 마스킹해도 바뀌지 않게 합니다. 예를 들어
"901225-1234567M1234567"의 여권번호는 앞 숫자가 "[주민등록번호]"로 바뀐 뒤에야
경계 조건을 만족하므로, 첫 치환 결과에서 다시 찾아 함께 확정합니다.
입력에 이미 있는 플레이스홀더 토큰은 어떤 탐지기도 다시 건드리지 않습니다.

개별 탐지 전략이 예외를 내면 해당 전략의 후보만 비우고 나머지 결과로 계속 진행합니다.
"""

from __future__ import annotations

import re
import time
from bisect import bisect_right
from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import TYPE_CHECKING

from ....lib.errors import ErrorCode, InvalidInputError, wrap_exception
from ....lib.logger import get_logger, get_throttler
from .address import AddressMatcher
from .models import (
    PLACEHOLDERS,
    Candidate,
    ConfidenceTier,
    DetectionReport,
    PIICategory,
    RedactionOptions,
    RedactionResult,
    ResolvedSpan,
)
from .names import NameCandidateDetector, build_name_detector
from .patterns import PatternLibrary, get_pattern_library
from .resolver import SpanResolver
from .whitelist import get_whitelist_manager

if TYPE_CHECKING:
    from ....config.schemas import PrivacyConfig

logger = get_logger(__name__)

Detector = Callable[[str], list[Candidate]]

_PLACEHOLDER_PATTERN = re.compile("|".join(re.escape(token) for token in PLACEHOLDERS.values()))


class RedactionEngine:
    """
    개인정보 마스킹 엔진

    생성 후 내부 상태가 바뀌지 않으므로 여러 스레드에서 하나의 인스턴스를 공유할 수 있습니다.
    호출마다 후보/스팬/리포트를 새로 만들고 반환 후 버립니다.

    사용 예시:
        engine = RedactionEngine()
        result = engine.redact("카드번호는 1234-5678-9012-3456입니다")
        result.masked_text  # "카드번호는 [카드번호]입니다"
        result.report.count(PIICategory.CARD)  # 1
    """

    def __init__(
        self,
        pattern_library: PatternLibrary | None = None,
        address_matcher: AddressMatcher | None = None,
        name_detector: NameCandidateDetector | None = None,
        resolver: SpanResolver | None = None,
        default_options: RedactionOptions | None = None,
    ):
        """
        Args:
            pattern_library: 정형 패턴 라이브러리 (None이면 공유 싱글톤)
            address_matcher: 주소 탐지기
            name_detector: 이름 탐지기 (None이면 기본 사전 + 기본 화이트리스트)
            resolver: 겹침 해소기
            default_options: options 없이 호출할 때 사용할 기본 옵션
        """
        self.pattern_library = pattern_library or get_pattern_library()
        self.address_matcher = address_matcher or AddressMatcher()
        self.name_detector = name_detector or _default_name_detector()
        self.resolver = resolver or SpanResolver()
        self.default_options = default_options or RedactionOptions()

        logger.info(
            "RedactionEngine 초기화",
            extra={
                "pattern_version": self.pattern_library.VERSION,
                "enabled_categories": sorted(c.value for c in self.default_options.enabled_categories),
                "min_name_confidence": self.default_options.min_name_confidence.value,
                "whitelist_size": len(self.name_detector.whitelist),
            },
        )

    @classmethod
    def from_config(
        cls,
        config: PrivacyConfig,
        whitelist: Iterable[str] | None = None,
    ) -> RedactionEngine:
        """
        설정으로부터 엔진 생성

        Args:
            config: PrivacyConfig
            whitelist: 화이트리스트 (None이면 config.whitelist)
        """
        detector = build_name_detector(
            whitelist=whitelist if whitelist is not None else config.whitelist,
            extra_surnames=config.extra_surnames,
            extra_titles=config.extra_titles,
        )
        return cls(name_detector=detector, default_options=RedactionOptions.from_config(config))

    # ========================================
    # 공개 API
    # ========================================
    def redact(self, text: str, options: RedactionOptions | None = None) -> RedactionResult:
        """
        텍스트 마스킹

        Args:
            text: 원본 텍스트 (빈 문자열 허용)
            options: 호출 단위 옵션 (None이면 엔진 기본 옵션)

        Returns:
            RedactionResult (마스킹 텍스트 + 리포트 + 확정 스팬)

        Raises:
            InvalidInputError: text가 str이 아닌 경우 (INPUT-001)
        """
        if not isinstance(text, str):
            raise InvalidInputError(ErrorCode.INPUT_001, received_type=type(text).__name__)

        started = time.perf_counter()
        options = options or self.default_options

        report = DetectionReport()
        if not text:
            report.processing_duration_micros = _elapsed_micros(started)
            return RedactionResult(masked_text=text, report=report)

        spans, passes = self._resolve_until_stable(text, options)
        masked_text, _, _ = _substitute(text, spans)
        for span in spans:
            report.record(span)

        report.processing_duration_micros = _elapsed_micros(started)

        if get_throttler().should_log("redaction.summary"):
            logger.debug(
                "마스킹 완료",
                extra={
                    "text_length": len(text),
                    "passes": passes,
                    "total_masked": report.total_masked,
                    "counts": {c.value: n for c, n in report.counts_by_category.items()},
                    "duration_micros": report.processing_duration_micros,
                },
            )

        return RedactionResult(masked_text=masked_text, report=report, spans=tuple(spans))

    def mask_text(self, text: str, options: RedactionOptions | None = None) -> str:
        """마스킹된 텍스트만 반환"""
        return self.redact(text, options).masked_text

    def contains_pii(self, text: str, options: RedactionOptions | None = None) -> bool:
        """
        PII 포함 여부 (치환 없이 확인)

        Args:
            text: 확인할 텍스트
        """
        if not isinstance(text, str):
            raise InvalidInputError(ErrorCode.INPUT_001, received_type=type(text).__name__)
        if not text:
            return False
        return bool(self.collect_candidates(text, options or self.default_options))

    def collect_candidates(self, text: str, options: RedactionOptions) -> list[Candidate]:
        """
        활성 탐지 전략을 모두 실행해 후보 수집

        이름 후보는 최소 신뢰도 미만을 제외하고 동일 구간을 병합한 뒤 합칩니다.
        텍스트에 이미 있는 플레이스홀더와 겹치는 후보는 버립니다.
        """
        candidates: list[Candidate] = []

        for label, detector in self._structured_detectors(options):
            candidates.extend(self._run_guarded(label, detector, text))

        if options.is_enabled(PIICategory.PERSON_NAME):
            names: list[Candidate] = []
            for strategy in self.name_detector.strategies(options.min_name_confidence):
                names.extend(self._run_guarded(strategy.label, strategy.detect, text))
            candidates.extend(
                c
                for c in NameCandidateDetector.merge(names)
                if c.confidence.at_least(options.min_name_confidence)
            )

        protected = [match.span() for match in _PLACEHOLDER_PATTERN.finditer(text)]
        if protected:
            candidates = _outside(candidates, protected)
        return candidates

    # ========================================
    # 내부 구현
    # ========================================
    def _structured_detectors(self, options: RedactionOptions) -> list[tuple[str, Detector]]:
        detectors: list[tuple[str, Detector]] = [
            (matcher.label, matcher.find)
            for matcher in self.pattern_library.matchers
            if options.is_enabled(matcher.category)
        ]
        if options.is_enabled(PIICategory.ADDRESS):
            detectors.append(("address", self.address_matcher.detect))
        return detectors

    def _run_guarded(self, label: str, detector: Detector, text: str) -> list[Candidate]:
        """탐지 전략 실행 (예외는 로그로 남기고 빈 후보로 대체)"""
        try:
            return list(detector(text))
        except Exception as e:
            failure = wrap_exception(e, ErrorCode.DETECT_001, detector=label)
            logger.error(
                "탐지기 실패, 해당 탐지기 결과 제외",
                extra={
                    "error_code": failure.error_code,
                    "detector": label,
                    "error_type": type(e).__name__,
                    "text_length": len(text),
                },
                exc_info=True,
            )
            return []

    def _resolve_until_stable(
        self, text: str, options: RedactionOptions
    ) -> tuple[list[ResolvedSpan], int]:
        """
        확정 스팬 계산 (치환 결과에서 새 후보가 없을 때까지 반복)

        치환 결과에서 새로 드러난 후보는 플레이스홀더와 겹치지 않으므로
        원본 오프셋으로 옮겨 기존 스팬에 더합니다. 반복마다 원본의 새 구간이
        확정되므로 반드시 끝납니다.

        Returns:
            (시작 위치 오름차순 확정 스팬, 탐지 패스 수)
        """
        spans = self.resolver.resolve(self.collect_candidates(text, options))
        passes = 1

        while spans:
            masked, masked_starts, original_starts = _substitute(text, spans)
            revealed = self.resolver.resolve(self.collect_candidates(masked, options))
            passes += 1
            if not revealed:
                break
            spans = sorted(
                spans + [_to_original(s, masked_starts, original_starts) for s in revealed],
                key=lambda s: s.start,
            )

        return spans, passes


def _substitute(text: str, spans: list[ResolvedSpan]) -> tuple[str, list[int], list[int]]:
    """
    원본 오프셋 기준 단일 패스 치환

    Returns:
        (치환 텍스트, 치환되지 않은 각 구간의 치환 텍스트 기준 시작 위치, 원본 기준 시작 위치)
    """
    parts: list[str] = []
    masked_starts: list[int] = []
    original_starts: list[int] = []
    cursor = 0
    length = 0

    for span in spans:
        gap = text[cursor : span.start]
        masked_starts.append(length)
        original_starts.append(cursor)
        parts.append(gap)
        parts.append(span.category.placeholder)
        length += len(gap) + len(span.category.placeholder)
        cursor = span.end

    masked_starts.append(length)
    original_starts.append(cursor)
    parts.append(text[cursor:])
    return "".join(parts), masked_starts, original_starts


def _to_original(
    span: ResolvedSpan, masked_starts: list[int], original_starts: list[int]
) -> ResolvedSpan:
    index = bisect_right(masked_starts, span.start) - 1
    start = span.start - masked_starts[index] + original_starts[index]
    return replace(span, start=start, end=start + span.length)


def _outside(candidates: list[Candidate], protected: list[tuple[int, int]]) -> list[Candidate]:
    """protected 구간(시작 위치 오름차순, 비중첩)과 겹치지 않는 후보만 남김"""
    ends = [end for _, end in protected]
    kept: list[Candidate] = []
    for candidate in candidates:
        index = bisect_right(ends, candidate.start)
        if index == len(protected) or protected[index][0] >= candidate.end:
            kept.append(candidate)
    return kept


def _elapsed_micros(started: float) -> int:
    return int((time.perf_counter() - started) * 1_000_000)


def _default_name_detector() -> NameCandidateDetector:
    """privacy.yaml 화이트리스트를 쓰는 기본 이름 탐지기 (PIIProcessor와 동일한 단어 집합)"""
    return build_name_detector(whitelist=get_whitelist_manager().words)


# ========================================
# 싱글톤 인스턴스 (선택적 사용)
# ========================================
_default_engine: RedactionEngine | None = None


def get_redaction_engine() -> RedactionEngine:
    """기본 RedactionEngine 싱글톤 반환"""
    global _default_engine
    if _default_engine is None:
        _default_engine = RedactionEngine()
    return _default_engine


def reset_redaction_engine() -> None:
    """싱글톤 인스턴스 리셋 (테스트용)"""
    global _default_engine
    _default_engine = None


def redact(
    text: str,
    enabled_categories: Iterable[str | PIICategory] | None = None,
    min_name_confidence: str | ConfidenceTier | None = None,
) -> RedactionResult:
    """
    편의 함수: 기본 엔진으로 마스킹

    Examples:
        >>> redact("test@example.com으로 보내주세요").masked_text
        '[이메일]으로 보내주세요'
    """
    options = None
    if enabled_categories is not None or min_name_confidence is not None:
        options = RedactionOptions.create(enabled_categories, min_name_confidence)
    return get_redaction_engine().redact(text, options)
