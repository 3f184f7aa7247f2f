"""
개인정보 보호 모듈 (녹취록 PII 마스킹)

주요 컴포넌트:
- PIIProcessor: 통합 Facade (권장 진입점)
- RedactionEngine: 마스킹 엔진 (탐지 → 겹침 해소 → 치환 → 집계)
- PatternLibrary: 정형 PII 정규식 레지스트리
- AddressMatcher: 행정구역 기반 주소 탐지
- NameCandidateDetector: 성씨 사전 + 문맥 기반 이름 탐지
- SpanResolver: 우선순위 기반 겹침 해소
- QualityValidator: 마스킹 품질 검증
- WhitelistManager: 이름 오탐 방지 화이트리스트

사용 예시:
    >>> from pii_masking.modules.core.privacy import redact
    >>> redact("제 이름은 김철수입니다").masked_text
    '제 이름은 [이름]입니다'

    >>> from pii_masking.modules.core.privacy import PIIProcessor
    >>> processor = PIIProcessor()
    >>> processor.process("연락처: 010-1234-5678").masked_text
    '연락처: [전화번호]'
"""

from .address import AddressMatcher
from .masker import RedactionEngine, get_redaction_engine, redact, reset_redaction_engine
from .models import (
    PLACEHOLDERS,
    PRIORITY_ORDER,
    Candidate,
    ConfidenceTier,
    DetectionReport,
    PIICategory,
    Readability,
    RedactionOptions,
    RedactionResult,
    ResolvedSpan,
    ValidationResult,
)
from .names import NameCandidateDetector, NameStrategy, build_name_detector
from .patterns import PatternLibrary, PatternMatcher, get_pattern_library, reset_pattern_library
from .processor import (
    PIIProcessor,
    PIIProcessResult,
    ProcessMode,
    get_pii_processor,
    process_pii,
    reset_pii_processor,
)
from .resolver import SpanResolver
from .validator import QualityValidator, ValidationWarning
from .whitelist import (
    DEFAULT_WHITELIST,
    WhitelistManager,
    get_whitelist_manager,
    reset_whitelist_manager,
)

__all__ = [
    # Facade (권장)
    "PIIProcessor",
    "PIIProcessResult",
    "ProcessMode",
    "get_pii_processor",
    "process_pii",
    "reset_pii_processor",
    # 엔진
    "RedactionEngine",
    "get_redaction_engine",
    "reset_redaction_engine",
    "redact",
    # 탐지기
    "PatternLibrary",
    "PatternMatcher",
    "get_pattern_library",
    "reset_pattern_library",
    "AddressMatcher",
    "NameCandidateDetector",
    "NameStrategy",
    "build_name_detector",
    "SpanResolver",
    # 검증
    "QualityValidator",
    "ValidationWarning",
    # 모델
    "PIICategory",
    "ConfidenceTier",
    "Readability",
    "Candidate",
    "ResolvedSpan",
    "DetectionReport",
    "RedactionResult",
    "RedactionOptions",
    "ValidationResult",
    "PLACEHOLDERS",
    "PRIORITY_ORDER",
    # 화이트리스트
    "WhitelistManager",
    "DEFAULT_WHITELIST",
    "get_whitelist_manager",
    "reset_whitelist_manager",
]
