"""
설정 스키마 패키지

사용 예시:
    >>> from pii_masking.config.schemas import PrivacyConfig
    >>> config = PrivacyConfig(min_name_confidence="high")
"""

from .base import BaseConfig
from .privacy import ALL_CATEGORY_NAMES, PrivacyConfig, QualityConfig

__all__ = [
    "BaseConfig",
    "PrivacyConfig",
    "QualityConfig",
    "ALL_CATEGORY_NAMES",
]
