"""
정형 PII 패턴 라이브러리 (PatternLibrary)

전화번호, 이메일, 주민등록번호, 카드번호, 여권번호, 운전면허번호,
사업자등록번호, 계좌번호를 정규식으로 탐지합니다.

적용 순서(우선순위)는 고정입니다:
    이메일 → 전화번호 → 주민등록번호 → 카드번호 → 여권번호
    → 운전면허번호 → 사업자등록번호 → 계좌번호

모든 숫자 패턴은 앞뒤 경계 검사((?<!\\d), (?!-?\\d))로
더 긴 숫자열의 일부를 잘못 잘라내지 않도록 합니다.

라이브러리는 프로세스 시작 시 한 번 생성되어 읽기 전용으로 공유됩니다.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from ....lib.logger import get_logger
from .models import PRIORITY_ORDER, Candidate, ConfidenceTier, PIICategory

logger = get_logger(__name__)


# ========================================
# 경계 조건
# ========================================
# 앞: 숫자 또는 "숫자-" 뒤에서 시작하지 않음
_LEFT = r"(?<!\d)(?<!\d-)"
# 뒤: 숫자 또는 "-숫자"가 이어지지 않음
_RIGHT = r"(?!-?\d)"
# 그룹 구분자: 하이픈 또는 공백 한 칸 (선택)
_SEP = r"[- ]?"

# 휴대전화(010, 011, 016~019) + 지역번호(02, 031~033, 041~044, 051~055, 061~064)
_PHONE_PREFIX = r"(?:01[016789]|02|0(?:3[1-3]|4[1-4]|5[1-5]|6[1-4]))"


@dataclass(frozen=True)
class PatternMatcher:
    """
    단일 카테고리 정규식 매처

    Attributes:
        category: 탐지 카테고리
        pattern: 컴파일된 정규식
        confidence: 신뢰도 (정형 패턴은 모두 HIGH)
        validator: 매치 문자열 추가 검증 함수 (False면 후보 제외)
    """

    category: PIICategory
    pattern: re.Pattern[str]
    confidence: ConfidenceTier = ConfidenceTier.HIGH
    validator: Callable[[str], bool] | None = None

    @property
    def label(self) -> str:
        return f"patterns.{self.category.value}"

    def find(self, text: str) -> list[Candidate]:
        """텍스트에서 후보 목록 생성"""
        candidates: list[Candidate] = []

        for match in self.pattern.finditer(text):
            value = match.group()
            if self.validator is not None and not self.validator(value):
                continue
            candidates.append(
                Candidate(
                    category=self.category,
                    start=match.start(),
                    end=match.end(),
                    matched_text=value,
                    confidence=self.confidence,
                    detector=self.label,
                )
            )

        return candidates


def _digits(value: str) -> str:
    return re.sub(r"[- ]", "", value)


def _is_valid_birth_date(value: str) -> bool:
    """주민등록번호 앞 6자리가 YYMMDD 형태인지 확인"""
    digits = _digits(value)
    month = int(digits[2:4])
    day = int(digits[4:6])
    return 1 <= month <= 12 and 1 <= day <= 31


def _looks_like_date(value: str) -> bool:
    """YYYY-MM-DD로 시작하는 숫자열인지 확인 (계좌번호 오탐 방지)"""
    groups = value.split("-")
    if len(groups) < 3 or [len(g) for g in groups[:3]] != [4, 2, 2]:
        return False

    year, month, day = (int(g) for g in groups[:3])
    return 1900 <= year <= 2100 and 1 <= month <= 12 and 1 <= day <= 31


def _is_account_length(value: str) -> bool:
    """국내 계좌번호 자릿수 범위 (10~14자리)"""
    return 10 <= len(_digits(value)) <= 14


def _is_bank_account(value: str) -> bool:
    return _is_account_length(value) and not _looks_like_date(value)


class PatternLibrary:
    """
    정형 PII 매처 레지스트리

    생성 후에는 변경되지 않으며, 여러 스레드에서 동시에 읽어도 안전합니다.

    사용 예시:
        library = get_pattern_library()
        candidates = library.detect("연락처: 010-1234-5678")
        # candidates[0].category == PIICategory.PHONE
    """

    # 버전 (리포트/로그용)
    VERSION = "1.0.0"

    # 이메일: 영문/숫자 로컬파트 + 도메인 (한글은 문자 클래스에 포함되지 않음)
    EMAIL_PATTERN = re.compile(
        r"(?<![A-Za-z0-9._%+-])[A-Za-z0-9][A-Za-z0-9._%+-]*@[A-Za-z0-9][A-Za-z0-9.-]*\.[A-Za-z]{2,}"
    )

    # 전화번호: 접두 + 3~4자리 + 4자리
    PHONE_PATTERN = re.compile(rf"{_LEFT}{_PHONE_PREFIX}{_SEP}\d{{3,4}}{_SEP}\d{{4}}{_RIGHT}")

    # 주민등록번호: YYMMDD + 구분자(선택) + [1-4] + 6자리
    NATIONAL_ID_PATTERN = re.compile(rf"{_LEFT}\d{{6}}{_SEP}[1-4]\d{{6}}{_RIGHT}")

    # 카드번호: 4자리 x 4그룹
    CARD_PATTERN = re.compile(rf"{_LEFT}\d{{4}}{_SEP}\d{{4}}{_SEP}\d{{4}}{_SEP}\d{{4}}{_RIGHT}")

    # 여권번호: 영문 대문자 1~2자 + 7~8자리
    PASSPORT_PATTERN = re.compile(r"(?<![A-Za-z0-9])[A-Z]{1,2}\d{7,8}(?!\d)")

    # 운전면허번호: 2-2-6-2
    DRIVER_LICENSE_PATTERN = re.compile(
        rf"{_LEFT}\d{{2}}{_SEP}\d{{2}}{_SEP}\d{{6}}{_SEP}\d{{2}}{_RIGHT}"
    )

    # 사업자등록번호: 3-2-5
    BUSINESS_REGISTRATION_PATTERN = re.compile(rf"{_LEFT}\d{{3}}{_SEP}\d{{2}}{_SEP}\d{{5}}{_RIGHT}")

    # 계좌번호: 하이픈 3~4그룹 또는 구분자 없는 10~14자리
    BANK_ACCOUNT_PATTERN = re.compile(
        rf"{_LEFT}(?:\d{{3,6}}-\d{{2,6}}-\d{{2,6}}(?:-\d{{1,6}})?|\d{{10,14}}){_RIGHT}"
    )

    def __init__(self) -> None:
        by_category: dict[PIICategory, PatternMatcher] = {
            PIICategory.EMAIL: PatternMatcher(PIICategory.EMAIL, self.EMAIL_PATTERN),
            PIICategory.PHONE: PatternMatcher(PIICategory.PHONE, self.PHONE_PATTERN),
            PIICategory.NATIONAL_ID: PatternMatcher(
                PIICategory.NATIONAL_ID, self.NATIONAL_ID_PATTERN, validator=_is_valid_birth_date
            ),
            PIICategory.CARD: PatternMatcher(PIICategory.CARD, self.CARD_PATTERN),
            PIICategory.PASSPORT: PatternMatcher(PIICategory.PASSPORT, self.PASSPORT_PATTERN),
            PIICategory.DRIVER_LICENSE: PatternMatcher(
                PIICategory.DRIVER_LICENSE, self.DRIVER_LICENSE_PATTERN
            ),
            PIICategory.BUSINESS_REGISTRATION: PatternMatcher(
                PIICategory.BUSINESS_REGISTRATION, self.BUSINESS_REGISTRATION_PATTERN
            ),
            PIICategory.BANK_ACCOUNT: PatternMatcher(
                PIICategory.BANK_ACCOUNT, self.BANK_ACCOUNT_PATTERN, validator=_is_bank_account
            ),
        }

        # PRIORITY_ORDER 순서 유지 (ADDRESS, PERSON_NAME은 별도 탐지기)
        self._matchers: tuple[PatternMatcher, ...] = tuple(
            by_category[category] for category in PRIORITY_ORDER if category in by_category
        )

        logger.info(
            "PatternLibrary 초기화",
            extra={
                "version": self.VERSION,
                "order": [m.category.value for m in self._matchers],
            },
        )

    @property
    def matchers(self) -> tuple[PatternMatcher, ...]:
        """우선순위 순서의 매처 목록"""
        return self._matchers

    @property
    def categories(self) -> tuple[PIICategory, ...]:
        return tuple(m.category for m in self._matchers)

    def matcher_for(self, category: PIICategory) -> PatternMatcher:
        for matcher in self._matchers:
            if matcher.category == category:
                return matcher
        raise KeyError(f"no structured matcher for {category.value}")

    def detect(self, text: str) -> list[Candidate]:
        """
        모든 정형 카테고리 탐지 (우선순위 순서로 이어붙임)

        겹침 해소는 SpanResolver가 담당합니다.
        """
        if not text:
            return []

        candidates: list[Candidate] = []
        for matcher in self._matchers:
            candidates.extend(matcher.find(text))
        return candidates

    def detect_category(self, category: PIICategory, text: str) -> list[Candidate]:
        return self.matcher_for(category).find(text) if text else []


# ========================================
# 싱글톤 인스턴스 (프로세스 수명 동안 읽기 전용)
# ========================================
_default_library: PatternLibrary | None = None


def get_pattern_library() -> PatternLibrary:
    """
    기본 PatternLibrary 싱글톤 반환

    생성은 부작용이 없고 멱등이므로 동시 최초 호출에서 두 번 생성되어도 무해합니다.
    """
    global _default_library
    if _default_library is None:
        _default_library = PatternLibrary()
    return _default_library


def reset_pattern_library() -> None:
    """싱글톤 인스턴스 리셋 (테스트용)"""
    global _default_library
    _default_library = None
