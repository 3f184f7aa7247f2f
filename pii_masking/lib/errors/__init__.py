"""에러 코드 · 양언어 메시지 · 예외 클래스.

INPUT-*  : 호출자 입력 오류 (전파)
DETECT-* : 탐지기 내부 실패 (엔진에서 격리)
CONFIG-* : 설정 파일/환경 변수 오류
VALIDATION-* : 품질 검증 경고 (예외 아님)

    >>> from pii_masking.lib.errors import ErrorCode, InvalidInputError
    >>> raise InvalidInputError(ErrorCode.INPUT_001, received_type="NoneType")
"""

from pii_masking.lib.errors.codes import ErrorCode
from pii_masking.lib.errors.exceptions import (
    ConfigError,
    DetectorFailure,
    GeneralError,
    InvalidInputError,
    MaskingException,
    get_exception_class,
    wrap_exception,
)
from pii_masking.lib.errors.formatter import (
    format_error_response,
    get_all_error_codes,
    get_default_language,
    get_error_codes_by_domain,
    get_error_message,
    get_error_solutions,
)

__all__ = [
    "ErrorCode",
    "MaskingException",
    "InvalidInputError",
    "DetectorFailure",
    "ConfigError",
    "GeneralError",
    "get_exception_class",
    "wrap_exception",
    "get_error_message",
    "get_error_solutions",
    "format_error_response",
    "get_default_language",
    "get_all_error_codes",
    "get_error_codes_by_domain",
]
