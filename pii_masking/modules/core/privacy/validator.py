"""
마스킹 품질 검증기 (QualityValidator)

마스킹 전후 텍스트를 비교해 과도한 마스킹 여부를 판정합니다.

- preserved_ratio = len(masked) / len(original)
- placeholder_density = 플레이스홀더 수 / 공백 기준 토큰 수
- 가독성: density > 0.5 → LOW, > 0.3 → MEDIUM, 그 외 HIGH

결과는 참고용이며 마스킹 결과를 바꾸거나 막지 않습니다.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ....lib.errors import ErrorCode, InvalidInputError, format_error_response
from ....lib.logger import get_logger
from .models import PLACEHOLDERS, Readability, ValidationResult

if TYPE_CHECKING:
    from ....config.schemas import QualityConfig

logger = get_logger(__name__)

PLACEHOLDER_PATTERN = re.compile("|".join(re.escape(p) for p in PLACEHOLDERS.values()))


@dataclass(frozen=True)
class ValidationWarning:
    """
    품질 경고 레코드 (예외로 던지지 않고 로그/리포트에만 사용)

    Attributes:
        preserved_ratio: 보존 비율
        readability: 가독성 등급
        error_code: 에러 코드 (VALIDATION-001)
    """

    preserved_ratio: float
    readability: Readability
    error_code: str = ErrorCode.VALIDATION_001.value

    def to_dict(self, lang: str = "ko") -> dict[str, Any]:
        return format_error_response(
            self.error_code,
            lang=lang,
            include_solutions=True,
            preserved_ratio=f"{self.preserved_ratio:.2f}",
            readability=self.readability.value,
        )


class QualityValidator:
    """
    마스킹 품질 검증기

    사용 예시:
        validator = QualityValidator()
        result = validator.validate(original, masked)
        if not result.is_valid:
            ...
    """

    def __init__(
        self,
        min_preserved_ratio: float = 0.5,
        max_preserved_ratio: float = 1.5,
        low_density_threshold: float = 0.5,
        medium_density_threshold: float = 0.3,
    ):
        self.min_preserved_ratio = min_preserved_ratio
        self.max_preserved_ratio = max_preserved_ratio
        self.low_density_threshold = low_density_threshold
        self.medium_density_threshold = medium_density_threshold

    @classmethod
    def from_config(cls, config: QualityConfig) -> QualityValidator:
        return cls(
            min_preserved_ratio=config.min_preserved_ratio,
            max_preserved_ratio=config.max_preserved_ratio,
            low_density_threshold=config.low_density_threshold,
            medium_density_threshold=config.medium_density_threshold,
        )

    def validate(self, original: str, masked: str) -> ValidationResult:
        """
        마스킹 품질 검증

        Args:
            original: 원본 텍스트
            masked: 마스킹된 텍스트

        Returns:
            ValidationResult (빈 원본은 보존 비율 1.0으로 간주)
        """
        for value in (original, masked):
            if not isinstance(value, str):
                raise InvalidInputError(ErrorCode.INPUT_001, received_type=type(value).__name__)

        preserved_ratio = len(masked) / len(original) if original else 1.0

        placeholder_count = len(PLACEHOLDER_PATTERN.findall(masked))
        tokens = masked.split()
        placeholder_density = placeholder_count / len(tokens) if tokens else 0.0

        if placeholder_density > self.low_density_threshold:
            readability = Readability.LOW
        elif placeholder_density > self.medium_density_threshold:
            readability = Readability.MEDIUM
        else:
            readability = Readability.HIGH

        is_valid = self.min_preserved_ratio < preserved_ratio < self.max_preserved_ratio

        result = ValidationResult(
            is_valid=is_valid,
            preserved_ratio=preserved_ratio,
            readability=readability,
            placeholder_count=placeholder_count,
            placeholder_density=placeholder_density,
        )

        warning = self.warning_for(result)
        if warning is not None:
            logger.warning(
                "마스킹 품질 경고",
                extra={
                    "error_code": warning.error_code,
                    "preserved_ratio": round(preserved_ratio, 4),
                    "readability": readability.value,
                    "placeholder_count": placeholder_count,
                },
            )

        return result

    @staticmethod
    def warning_for(result: ValidationResult) -> ValidationWarning | None:
        """유효하지 않거나 가독성이 LOW인 결과에 대한 경고 레코드"""
        if result.is_valid and result.readability != Readability.LOW:
            return None
        return ValidationWarning(
            preserved_ratio=result.preserved_ratio,
            readability=result.readability,
        )
