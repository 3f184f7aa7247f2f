"""
Privacy (개인정보 마스킹) 설정 스키마

마스킹 대상 카테고리, 이름 탐지 신뢰도, 화이트리스트,
품질 검증 임계값 등의 설정을 정의합니다.
"""

from pydantic import Field, field_validator, model_validator

from .base import BaseConfig, resolve_env_reference

ALL_CATEGORY_NAMES: list[str] = [
    "phone",
    "email",
    "national_id",
    "card",
    "bank_account",
    "address",
    "business_registration",
    "passport",
    "driver_license",
    "person_name",
]


class QualityConfig(BaseConfig):
    """
    마스킹 품질 검증 설정

    preserved_ratio가 (min, max) 구간 밖이면 유효하지 않은 것으로 판정하고,
    플레이스홀더 밀도로 가독성을 분류합니다.
    """

    min_preserved_ratio: float = Field(default=0.5, ge=0.0, description="보존 비율 하한 (배타)")
    max_preserved_ratio: float = Field(default=1.5, gt=0.0, description="보존 비율 상한 (배타)")
    low_density_threshold: float = Field(
        default=0.5, ge=0.0, le=1.0, description="이 값을 초과하면 가독성 low"
    )
    medium_density_threshold: float = Field(
        default=0.3, ge=0.0, le=1.0, description="이 값을 초과하면 가독성 medium"
    )

    @model_validator(mode="after")
    def validate_thresholds(self) -> "QualityConfig":
        if self.min_preserved_ratio >= self.max_preserved_ratio:
            raise ValueError("min_preserved_ratio must be less than max_preserved_ratio")
        if self.medium_density_threshold >= self.low_density_threshold:
            raise ValueError("medium_density_threshold must be less than low_density_threshold")
        return self


class PrivacyConfig(BaseConfig):
    """
    개인정보 마스킹 설정

    privacy.yaml의 `privacy` 섹션에 대응합니다.
    """

    enabled_categories: list[str] = Field(
        default_factory=lambda: list(ALL_CATEGORY_NAMES),
        description="마스킹 활성화 카테고리 목록",
    )

    min_name_confidence: str = Field(
        default="medium",
        pattern="^(high|medium|low)$",
        description="이름 마스킹 최소 신뢰도 (high, medium, low)",
    )

    whitelist: list[str] = Field(
        default_factory=list,
        description="이름 오탐 방지 단어 목록 (비어 있으면 기본값 사용)",
    )

    extra_surnames: list[str] = Field(
        default_factory=list,
        description="기본 성씨 사전에 추가할 성씨 (한 글자)",
    )

    extra_titles: list[str] = Field(
        default_factory=list,
        description="기본 호칭/직함 목록에 추가할 토큰",
    )

    quality: QualityConfig = Field(default_factory=QualityConfig)

    @field_validator("min_name_confidence", mode="before")
    @classmethod
    def normalize_confidence(cls, v: str) -> str:
        v = resolve_env_reference(v)
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("enabled_categories")
    @classmethod
    def validate_categories(cls, v: list[str]) -> list[str]:
        unknown = [name for name in v if name not in ALL_CATEGORY_NAMES]
        if unknown:
            raise ValueError(f"unknown categories: {unknown}")
        return v

    @field_validator("extra_surnames")
    @classmethod
    def validate_surnames(cls, v: list[str]) -> list[str]:
        for surname in v:
            if len(surname) != 1 or not ("가" <= surname <= "힣"):
                raise ValueError(f"surname must be a single Hangul syllable: {surname!r}")
        return v

    @field_validator("extra_titles")
    @classmethod
    def validate_titles(cls, v: list[str]) -> list[str]:
        titles = [title.strip() for title in v]
        if any(not title for title in titles):
            raise ValueError("title must not be empty")
        return titles
