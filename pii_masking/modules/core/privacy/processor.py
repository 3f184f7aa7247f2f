"""
PII 처리 Facade (PIIProcessor)

마스킹 엔진, 화이트리스트, 품질 검증을 하나의 인터페이스로 묶는 Facade.

처리 모드:
- "text": 녹취록 본문 마스킹
- "filename": 파일명 마스킹 (확장자는 유지)

사용 예시:
    >>> processor = PIIProcessor()
    >>> result = processor.process("연락처: 010-1234-5678", mode="text")
    >>> print(result.masked_text)  # "연락처: [전화번호]"
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

from ....lib.config_loader import ConfigLoader
from ....lib.logger import get_logger
from .masker import RedactionEngine
from .models import RedactionOptions, RedactionResult, ValidationResult
from .validator import QualityValidator
from .whitelist import WhitelistManager

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from ....config.schemas import PrivacyConfig

logger = get_logger(__name__)


class ProcessMode(Enum):
    """PII 처리 모드"""

    TEXT = "text"  # 녹취록 본문
    FILENAME = "filename"  # 파일명 (확장자 제외 부분만 마스킹)

    @classmethod
    def parse(cls, value: str | ProcessMode) -> ProcessMode:
        if isinstance(value, ProcessMode):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.warning("알 수 없는 처리 모드, text로 처리", extra={"mode": value})
            return cls.TEXT


@dataclass
class PIIProcessResult:
    """
    PII 처리 결과 (통합)

    Attributes:
        original_text: 원본 텍스트
        masked_text: 마스킹된 텍스트
        mode: 처리 모드
        counts: 카테고리 값 → 마스킹 수
        total_masked_count: 총 마스킹 수
        contains_pii: PII 포함 여부
        validation: 품질 검증 결과 (TEXT 모드)
        processing_time_ms: 처리 시간 (밀리초)
        metadata: 추가 메타데이터
    """

    original_text: str
    masked_text: str
    mode: ProcessMode
    counts: dict[str, int] = field(default_factory=dict)
    total_masked_count: int = 0
    contains_pii: bool = False
    validation: ValidationResult | None = None
    processing_time_ms: float = 0.0
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_redaction(
        cls,
        original: str,
        redaction: RedactionResult,
        mode: ProcessMode,
        validation: ValidationResult | None = None,
    ) -> PIIProcessResult:
        return cls(
            original_text=original,
            masked_text=redaction.masked_text,
            mode=mode,
            counts={c.value: n for c, n in redaction.report.counts_by_category.items()},
            total_masked_count=redaction.report.total_masked,
            contains_pii=redaction.report.total_masked > 0,
            validation=validation,
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환 (원문은 포함하지 않음)"""
        return {
            "mode": self.mode.value,
            "masked_text": self.masked_text,
            "counts": dict(self.counts),
            "total_masked_count": self.total_masked_count,
            "contains_pii": self.contains_pii,
            "validation": self.validation.to_dict() if self.validation else None,
            "processing_time_ms": self.processing_time_ms,
            "metadata": self.metadata or {},
        }


class PIIProcessor:
    """
    PII 처리 Facade

    호출 코드는 process()만 사용하고, 엔진 구성/화이트리스트 동기화/품질 검증은
    내부에서 조율합니다.
    """

    def __init__(
        self,
        config: PrivacyConfig | None = None,
        whitelist_manager: WhitelistManager | None = None,
        validator: QualityValidator | None = None,
        config_path: str | Path | None = None,
    ):
        """
        Args:
            config: 마스킹 설정 (None이면 config_path 파일 로드)
            whitelist_manager: 화이트리스트 관리자 (None이면 config.whitelist로 생성)
            validator: 품질 검증기 (None이면 config.quality로 생성)
            config_path: privacy.yaml 경로 (None이면 PII_MASKING_CONFIG 또는 기본 파일).
                reload_whitelist()도 이 파일을 다시 읽습니다.
        """
        loader = ConfigLoader(config_path)
        self._config = config or loader.load_config()
        self._config_path = loader.config_path

        if whitelist_manager is None:
            whitelist_manager = WhitelistManager(
                config_path=self._config_path,
                initial_words=self._config.whitelist or None,
            )
        self._whitelist_manager = whitelist_manager

        self._validator = validator or QualityValidator.from_config(self._config.quality)

        # 내부 엔진 (지연 초기화, 화이트리스트 변경 시 재생성)
        self._engine: RedactionEngine | None = None

        logger.info(
            "PIIProcessor 초기화",
            extra={
                "enabled_categories": len(self._config.enabled_categories),
                "min_name_confidence": self._config.min_name_confidence,
                "whitelist_size": len(self._whitelist_manager),
            },
        )

    @property
    def engine(self) -> RedactionEngine:
        """RedactionEngine 인스턴스 (지연 초기화)"""
        if self._engine is None:
            self._engine = RedactionEngine.from_config(
                self._config, whitelist=self._whitelist_manager.words
            )
        return self._engine

    @property
    def config(self) -> PrivacyConfig:
        return self._config

    @property
    def config_path(self) -> Path:
        """설정 파일 경로 (reload_whitelist 대상)"""
        return self._config_path

    @property
    def whitelist_manager(self) -> WhitelistManager:
        return self._whitelist_manager

    @property
    def validator(self) -> QualityValidator:
        return self._validator

    def process(
        self,
        text: str,
        mode: str | ProcessMode = ProcessMode.TEXT,
        options: RedactionOptions | None = None,
    ) -> PIIProcessResult:
        """
        PII 처리

        Args:
            text: 처리할 텍스트 (FILENAME 모드에서는 파일명)
            mode: 처리 모드
            options: 호출 단위 옵션 (None이면 설정 기본값)

        Returns:
            PIIProcessResult

        Raises:
            InvalidInputError: text가 str이 아닌 경우
        """
        start_time = time.perf_counter()
        mode = ProcessMode.parse(mode)

        if mode == ProcessMode.FILENAME:
            result = self._process_filename(text, options)
        else:
            result = self._process_text(text, options)

        result.processing_time_ms = (time.perf_counter() - start_time) * 1000
        return result

    def _process_text(self, text: str, options: RedactionOptions | None) -> PIIProcessResult:
        redaction = self.engine.redact(text, options)
        validation = self._validator.validate(text, redaction.masked_text)
        return PIIProcessResult.from_redaction(text, redaction, ProcessMode.TEXT, validation)

    def _process_filename(self, text: str, options: RedactionOptions | None) -> PIIProcessResult:
        """
        파일명 마스킹 (확장자 유지)

        - "김철수 부장님 인터뷰.txt" → "[이름] 부장님 인터뷰.txt"
        """
        suffix = PurePath(text).suffix if isinstance(text, str) else ""
        stem = text[: len(text) - len(suffix)] if suffix else text

        redaction = self.engine.redact(stem, options)
        result = PIIProcessResult.from_redaction(text, redaction, ProcessMode.FILENAME)
        result.masked_text = redaction.masked_text + suffix
        return result

    def process_batch(
        self,
        texts: Sequence[str],
        mode: str | ProcessMode = ProcessMode.TEXT,
    ) -> list[PIIProcessResult]:
        """여러 텍스트 일괄 처리"""
        return [self.process(text, mode) for text in texts]

    def process_upload(self, filename: str, content: str) -> PIIProcessResult:
        """
        업로드 단위 처리 (파일명 + 본문)

        본문 결과를 기준으로, 파일명 마스킹 수는 "FILENAME_" 접두사를 붙여 counts에 합칩니다.

        Args:
            filename: 업로드 파일명
            content: 디코딩된 본문 텍스트

        Returns:
            본문 PIIProcessResult (metadata에 masked_filename 포함)
        """
        start_time = time.perf_counter()

        content_result = self.process(content, ProcessMode.TEXT)
        filename_result = self.process(filename, ProcessMode.FILENAME)

        for category, count in filename_result.counts.items():
            key = f"FILENAME_{category}"
            content_result.counts[key] = content_result.counts.get(key, 0) + count

        content_result.total_masked_count += filename_result.total_masked_count
        content_result.contains_pii = content_result.contains_pii or filename_result.contains_pii
        content_result.metadata = {
            "masked_filename": filename_result.masked_text,
            "filename_masked_count": filename_result.total_masked_count,
        }
        content_result.processing_time_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            "업로드 마스킹 완료",
            extra={
                "content_length": len(content),
                "total_masked": content_result.total_masked_count,
                "filename_masked": filename_result.total_masked_count,
            },
        )
        return content_result

    def contains_pii(self, text: str) -> bool:
        """텍스트에 PII 포함 여부 확인 (마스킹 없이)"""
        return self.engine.contains_pii(text)

    def update_whitelist(self, words: Sequence[str]) -> None:
        """화이트리스트에 단어 추가 (엔진 재생성)"""
        self._whitelist_manager.add_words(words)
        self._engine = None

    def remove_from_whitelist(self, words: Sequence[str]) -> None:
        """화이트리스트에서 단어 제거 (엔진 재생성)"""
        self._whitelist_manager.remove_words(words)
        self._engine = None

    def reload_whitelist(self) -> bool:
        """config_path 파일에서 화이트리스트 다시 로드 (엔진 재생성)"""
        result = self._whitelist_manager.reload()
        self._engine = None
        return result


# ========================================
# 편의 함수 (싱글톤 사용)
# ========================================
_default_processor: PIIProcessor | None = None


def get_pii_processor() -> PIIProcessor:
    """기본 PIIProcessor 싱글톤 인스턴스 반환"""
    global _default_processor
    if _default_processor is None:
        _default_processor = PIIProcessor()
    return _default_processor


def reset_pii_processor() -> None:
    """싱글톤 인스턴스 리셋 (테스트용)"""
    global _default_processor
    _default_processor = None


def process_pii(text: str, mode: str = "text") -> PIIProcessResult:
    """
    PII 처리 편의 함수

    Args:
        text: 처리할 텍스트
        mode: 처리 모드 ("text", "filename")
    """
    return get_pii_processor().process(text, mode)
