"""
PII 마스킹 데이터 모델

탐지 후보, 확정 스팬, 탐지 리포트, 검증 결과를 위한 데이터 클래스 정의.
호출마다 새로 생성되고 호출이 끝나면 버려지는 값 객체들입니다.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from ....lib.errors import ErrorCode, InvalidInputError

if TYPE_CHECKING:
    from ....config.schemas import PrivacyConfig


class PIICategory(Enum):
    """
    PII(개인식별정보) 카테고리

    정형 패턴:
        - PHONE, EMAIL, NATIONAL_ID, CARD, BANK_ACCOUNT,
          BUSINESS_REGISTRATION, PASSPORT, DRIVER_LICENSE
    행정구역 기반:
        - ADDRESS
    휴리스틱 기반:
        - PERSON_NAME
    """

    PHONE = "phone"
    EMAIL = "email"
    NATIONAL_ID = "national_id"
    CARD = "card"
    BANK_ACCOUNT = "bank_account"
    ADDRESS = "address"
    BUSINESS_REGISTRATION = "business_registration"
    PASSPORT = "passport"
    DRIVER_LICENSE = "driver_license"
    PERSON_NAME = "person_name"

    @property
    def placeholder(self) -> str:
        """카테고리별 고정 플레이스홀더"""
        return PLACEHOLDERS[self]

    @property
    def priority(self) -> int:
        """적용 우선순위 (작을수록 먼저 확정)"""
        return PRIORITY_ORDER.index(self)

    @classmethod
    def parse(cls, value: str | PIICategory) -> PIICategory:
        """문자열(값 또는 이름) → PIICategory"""
        if isinstance(value, PIICategory):
            return value
        normalized = value.strip().lower()
        for category in cls:
            if normalized in (category.value, category.name.lower()):
                return category
        raise InvalidInputError(ErrorCode.INPUT_002, option="category", value=value)


# 다운스트림 소비자가 토큰 문자열로 키잉하므로 값 변경 금지
PLACEHOLDERS: dict[PIICategory, str] = {
    PIICategory.PHONE: "[전화번호]",
    PIICategory.EMAIL: "[이메일]",
    PIICategory.NATIONAL_ID: "[주민등록번호]",
    PIICategory.CARD: "[카드번호]",
    PIICategory.BANK_ACCOUNT: "[계좌번호]",
    PIICategory.ADDRESS: "[주소]",
    PIICategory.BUSINESS_REGISTRATION: "[사업자번호]",
    PIICategory.PASSPORT: "[여권번호]",
    PIICategory.DRIVER_LICENSE: "[운전면허번호]",
    PIICategory.PERSON_NAME: "[이름]",
}

# 정형 패턴 → 주소 → 이름 순서 (전체 순서)
PRIORITY_ORDER: tuple[PIICategory, ...] = (
    PIICategory.EMAIL,
    PIICategory.PHONE,
    PIICategory.NATIONAL_ID,
    PIICategory.CARD,
    PIICategory.PASSPORT,
    PIICategory.DRIVER_LICENSE,
    PIICategory.BUSINESS_REGISTRATION,
    PIICategory.BANK_ACCOUNT,
    PIICategory.ADDRESS,
    PIICategory.PERSON_NAME,
)

if set(PLACEHOLDERS) != set(PIICategory) or set(PRIORITY_ORDER) != set(PIICategory):
    raise RuntimeError("PLACEHOLDERS/PRIORITY_ORDER must cover every PIICategory")


class ConfidenceTier(Enum):
    """탐지 신뢰도 등급 (HIGH > MEDIUM > LOW)"""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]

    def at_least(self, other: ConfidenceTier) -> bool:
        """self가 other 이상의 신뢰도인지"""
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: str | ConfidenceTier) -> ConfidenceTier:
        if isinstance(value, ConfidenceTier):
            return value
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError):
            raise InvalidInputError(
                ErrorCode.INPUT_002, option="min_name_confidence", value=value
            ) from None


class Readability(Enum):
    """마스킹 결과 가독성 등급"""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Candidate:
    """
    탐지 후보

    불변(frozen) 설계로 해시 가능하며 Set/Dict 키로 사용 가능.
    오프셋은 항상 원본 텍스트 기준 (중간 치환 결과가 아님).

    Attributes:
        category: PII 카테고리
        start: 시작 위치 (포함)
        end: 끝 위치 (미포함)
        matched_text: 원본에서 잘라낸 문자열
        confidence: 신뢰도 등급
        detector: 후보를 만든 탐지 전략 라벨 (로깅용)
    """

    category: PIICategory
    start: int
    end: int
    matched_text: str
    confidence: ConfidenceTier = ConfidenceTier.HIGH
    detector: str = ""

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"start must be non-negative, got {self.start}")
        if self.end <= self.start:
            raise ValueError(f"end ({self.end}) must be > start ({self.start})")
        if len(self.matched_text) != self.end - self.start:
            raise ValueError("matched_text length must equal end - start")

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: Candidate) -> bool:
        """[start, end) 구간이 겹치는지 확인"""
        return self.start < other.end and other.start < self.end

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "start": self.start,
            "end": self.end,
            "matched_text": self.matched_text,
            "confidence": self.confidence.value,
            "detector": self.detector,
        }


@dataclass(frozen=True)
class ResolvedSpan(Candidate):
    """충돌 해소를 통과한 확정 스팬"""

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> ResolvedSpan:
        return cls(
            category=candidate.category,
            start=candidate.start,
            end=candidate.end,
            matched_text=candidate.matched_text,
            confidence=candidate.confidence,
            detector=candidate.detector,
        )


@dataclass
class DetectionReport:
    """
    탐지 집계 리포트

    Attributes:
        counts_by_category: 카테고리별 마스킹 수
        counts_by_confidence: 신뢰도별 마스킹 수
        total_masked: 총 마스킹 수
        processing_duration_micros: 처리 시간 (마이크로초)
    """

    counts_by_category: dict[PIICategory, int] = field(default_factory=dict)
    counts_by_confidence: dict[ConfidenceTier, int] = field(default_factory=dict)
    total_masked: int = 0
    processing_duration_micros: int = 0

    def record(self, span: Candidate) -> None:
        """확정 스팬 하나를 집계에 반영"""
        self.counts_by_category[span.category] = self.counts_by_category.get(span.category, 0) + 1
        self.counts_by_confidence[span.confidence] = (
            self.counts_by_confidence.get(span.confidence, 0) + 1
        )
        self.total_masked += 1

    def count(self, category: PIICategory) -> int:
        return self.counts_by_category.get(category, 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "counts_by_category": {c.value: n for c, n in self.counts_by_category.items()},
            "counts_by_confidence": {t.value: n for t, n in self.counts_by_confidence.items()},
            "total_masked": self.total_masked,
            "processing_duration_micros": self.processing_duration_micros,
        }


@dataclass
class RedactionResult:
    """
    마스킹 결과

    Attributes:
        masked_text: 플레이스홀더로 치환된 텍스트
        report: 탐지 집계 리포트
        spans: 적용된 확정 스팬 (시작 위치 오름차순)
    """

    masked_text: str
    report: DetectionReport
    spans: tuple[ResolvedSpan, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "masked_text": self.masked_text,
            "report": self.report.to_dict(),
        }


@dataclass(frozen=True)
class ValidationResult:
    """
    마스킹 품질 검증 결과

    Attributes:
        is_valid: 0.5 < preserved_ratio < 1.5 여부 (임계값은 설정 가능)
        preserved_ratio: len(masked) / len(original)
        readability: 플레이스홀더 밀도 기반 가독성
        placeholder_count: 플레이스홀더 수
        placeholder_density: 플레이스홀더 수 / 공백 기준 토큰 수
    """

    is_valid: bool
    preserved_ratio: float
    readability: Readability
    placeholder_count: int = 0
    placeholder_density: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "preserved_ratio": round(self.preserved_ratio, 4),
            "readability": self.readability.value,
            "placeholder_count": self.placeholder_count,
            "placeholder_density": round(self.placeholder_density, 4),
        }


@dataclass(frozen=True)
class RedactionOptions:
    """
    호출 단위 마스킹 옵션

    Attributes:
        enabled_categories: 활성화 카테고리 (기본: 전체)
        min_name_confidence: 이름 마스킹 최소 신뢰도 (기본: MEDIUM)
    """

    enabled_categories: frozenset[PIICategory] = frozenset(PIICategory)
    min_name_confidence: ConfidenceTier = ConfidenceTier.MEDIUM

    def is_enabled(self, category: PIICategory) -> bool:
        return category in self.enabled_categories

    @classmethod
    def create(
        cls,
        enabled_categories: Iterable[str | PIICategory] | None = None,
        min_name_confidence: str | ConfidenceTier | None = None,
    ) -> RedactionOptions:
        """문자열 입력을 허용하는 생성자 (잘못된 값은 InvalidInputError)"""
        categories = (
            frozenset(PIICategory.parse(c) for c in enabled_categories)
            if enabled_categories is not None
            else frozenset(PIICategory)
        )
        tier = (
            ConfidenceTier.parse(min_name_confidence)
            if min_name_confidence is not None
            else ConfidenceTier.MEDIUM
        )
        return cls(enabled_categories=categories, min_name_confidence=tier)

    @classmethod
    def from_config(cls, config: PrivacyConfig) -> RedactionOptions:
        return cls.create(
            enabled_categories=config.enabled_categories,
            min_name_confidence=config.min_name_confidence,
        )
