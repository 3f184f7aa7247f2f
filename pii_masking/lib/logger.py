"""
Structured logging for PII masking
구조화된 로깅 시스템

- structlog + 표준 logging (stderr 출력, stdout은 마스킹 결과 전용)
- LOG_LEVEL / LOG_FORMAT(json|console) / NODE_ENV 환경 변수로 제어
- 원문 조각이 담길 수 있는 필드는 렌더링 전에 가려서 출력
"""

import logging
import os
import sys
from collections import defaultdict, deque
from datetime import datetime, timedelta, timezone
from time import monotonic
from typing import Any, TextIO, cast

import structlog
from structlog.stdlib import LoggerFactory

# 한국 시간대 (KST = UTC+9)
KST = timezone(timedelta(hours=9))

# 로그에 값 자체를 남기지 않는 필드
SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {"text", "original_text", "masked_text", "matched_text", "value", "content", "filename"}
)


class LogThrottler:
    """
    키별 초당 로그 수 제한

    엔진의 호출 단위 DEBUG 요약처럼 호출 빈도에 비례해 쌓이는 로그에 사용합니다.
    """

    def __init__(self, max_logs_per_second: int = 50, window_seconds: float = 1.0):
        self.max_logs_per_second = max_logs_per_second
        self.window_seconds = window_seconds
        self._events: dict[str, deque[float]] = defaultdict(deque)

    def should_log(self, log_key: str) -> bool:
        now = monotonic()
        events = self._events[log_key]

        while events and now - events[0] >= self.window_seconds:
            events.popleft()

        if len(events) >= self.max_logs_per_second:
            return False
        events.append(now)
        return True

    def reset(self) -> None:
        self._events.clear()


def add_kst_timestamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """KST(한국 시간) 타임스탬프 추가"""
    event_dict["timestamp"] = datetime.now(KST).isoformat()
    return event_dict


def flatten_extra(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """logger.info(..., extra={...}) 형태의 필드를 최상위로 펼침"""
    extra = event_dict.pop("extra", None)
    if isinstance(extra, dict):
        for key, value in extra.items():
            event_dict.setdefault(key, value)
    return event_dict


def mask_sensitive_fields(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """원문 조각 필드는 길이만 남김"""
    for key in SENSITIVE_FIELDS.intersection(event_dict):
        value = event_dict[key]
        event_dict[key] = f"<{len(value)} chars>" if isinstance(value, str) else "<hidden>"
    return event_dict


class MaskingLogger:
    """PII 마스킹 로깅 시스템"""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.is_production = os.getenv("NODE_ENV", "development") == "production"
        default_level = "WARNING" if self.is_production else "INFO"
        self.log_level = os.getenv("LOG_LEVEL", default_level).upper()
        self.stream = stream or sys.stderr

        self.throttler = LogThrottler(max_logs_per_second=50)

        self._setup_logging()

    def _setup_logging(self) -> None:
        level = getattr(logging, self.log_level, logging.INFO)

        logging.basicConfig(
            level=level, format="%(message)s", handlers=[logging.StreamHandler(self.stream)]
        )

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                add_kst_timestamp,  # type: ignore[list-item]
                flatten_extra,  # type: ignore[list-item]
                mask_sensitive_fields,  # type: ignore[list-item]
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                self._add_context,  # type: ignore[list-item]
                (
                    structlog.processors.JSONRenderer(ensure_ascii=False)
                    if self._should_use_json()
                    else structlog.dev.ConsoleRenderer(colors=False)
                ),
            ],
            context_class=dict,
            logger_factory=LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _should_use_json(self) -> bool:
        return os.getenv("LOG_FORMAT", "console").lower() == "json"

    def _add_context(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["service"] = "pii-masking"
        event_dict["environment"] = os.getenv("NODE_ENV", "development")
        return event_dict

    def get_logger(self, name: str | None = None) -> structlog.BoundLogger:
        """구조화된 로거 반환"""
        return cast(structlog.BoundLogger, structlog.get_logger(name or __name__))


# 글로벌 로거 인스턴스
_masking_logger = MaskingLogger()


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """로거 인스턴스 반환"""
    return _masking_logger.get_logger(name)


def get_throttler() -> LogThrottler:
    """공유 로그 쓰로틀러 반환"""
    return _masking_logger.throttler
