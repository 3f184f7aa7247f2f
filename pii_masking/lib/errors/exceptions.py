"""마스킹 엔진 예외 계층.

예외마다 에러 코드 도메인("INPUT", "DETECT", ...)을 클래스 속성으로 가지며,
코드 문자열만으로 알맞은 예외 클래스를 고를 수 있습니다.
"""

from typing import Any

from pii_masking.lib.errors.codes import ErrorCode
from pii_masking.lib.errors.formatter import format_error_response


def _code_str(error_code: str | ErrorCode) -> str:
    return error_code.value if isinstance(error_code, ErrorCode) else error_code


class MaskingException(Exception):
    """에러 코드 + 포맷팅 컨텍스트를 담는 기본 예외.

    str(exc)는 한국어 메시지, to_dict()는 언어를 골라 응답 형태로 변환합니다.
    """

    domain: str | None = None

    def __init__(self, error_code: str | ErrorCode, **context: Any) -> None:
        self.error_code = _code_str(error_code)
        self.context = context
        super().__init__(self._render("ko", include_solutions=False)["message"])

    def _render(self, lang: str, include_solutions: bool) -> dict[str, Any]:
        return format_error_response(
            self.error_code, lang=lang, include_solutions=include_solutions, **self.context
        )

    def to_dict(self, lang: str = "ko", include_solutions: bool = True) -> dict[str, Any]:
        """
        Example:
            >>> InvalidInputError(ErrorCode.INPUT_001, received_type="int").to_dict(lang="en")["error_code"]
            'INPUT-001'
        """
        return self._render(lang, include_solutions)


class InvalidInputError(MaskingException):
    """텍스트가 문자열이 아니거나 옵션 값이 잘못됨. 호출자에게 그대로 전파."""

    domain = "INPUT"


class DetectorFailure(MaskingException):
    """탐지 전략 하나가 실패함. 엔진 안에서 로그만 남기고 격리."""

    domain = "DETECT"


class ConfigError(MaskingException):
    domain = "CONFIG"


class GeneralError(MaskingException):
    domain = "GENERAL"


_BY_DOMAIN: dict[str, type[MaskingException]] = {
    cls.domain: cls
    for cls in (InvalidInputError, DetectorFailure, ConfigError, GeneralError)
    if cls.domain
}


def get_exception_class(error_code: str | ErrorCode) -> type[MaskingException]:
    """코드 접두사(도메인)로 예외 클래스 선택. 모르는 도메인은 MaskingException."""
    domain, _, _ = _code_str(error_code).partition("-")
    return _BY_DOMAIN.get(domain, MaskingException)


def wrap_exception(
    error: Exception,
    default_code: str | ErrorCode = ErrorCode.GENERAL_001,
    **context: Any,
) -> MaskingException:
    """
    임의의 예외를 MaskingException으로 감쌈

    이미 MaskingException이면 그대로 반환합니다. 원래 예외의 타입/메시지는
    original_error_type / original_error_message 컨텍스트로 남습니다.
    """
    if isinstance(error, MaskingException):
        return error

    code = _code_str(default_code)
    return get_exception_class(code)(
        code,
        original_error_type=type(error).__name__,
        original_error_message=str(error),
        **context,
    )
