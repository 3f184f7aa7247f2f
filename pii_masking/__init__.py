"""
pii_masking - 한국어 인터뷰 녹취록 개인정보 탐지 및 마스킹 엔진

    >>> from pii_masking import redact
    >>> redact("이메일은 test@example.com이고 전화번호는 010-1234-5678입니다").masked_text
    '이메일은 [이메일]이고 전화번호는 [전화번호]입니다'
"""

from .modules.core.privacy import (
    PIICategory,
    PIIProcessor,
    RedactionEngine,
    RedactionOptions,
    RedactionResult,
    ValidationResult,
    redact,
)

__version__ = "1.0.0"

__all__ = [
    "PIICategory",
    "PIIProcessor",
    "RedactionEngine",
    "RedactionOptions",
    "RedactionResult",
    "ValidationResult",
    "redact",
    "__version__",
]
