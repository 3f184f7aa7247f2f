"""
에러 처리 라이브러리 테스트

에러 코드 ↔ 메시지/해결 방법 일관성, 예외 클래스 매핑, 래핑 검증.
"""

import pytest

from pii_masking.lib.errors import (
    ConfigError,
    DetectorFailure,
    ErrorCode,
    GeneralError,
    InvalidInputError,
    MaskingException,
    format_error_response,
    get_all_error_codes,
    get_error_codes_by_domain,
    get_error_message,
    get_exception_class,
    wrap_exception,
)
from pii_masking.lib.errors.messages import ERROR_MESSAGES, ERROR_SOLUTIONS


class TestErrorCatalog:
    """에러 코드 카탈로그 테스트"""

    def test_every_code_has_messages_and_solutions(self) -> None:
        for code in ErrorCode:
            assert set(ERROR_MESSAGES[code.value]) == {"ko", "en"}
            assert ERROR_SOLUTIONS[code.value]["ko"]
            assert ERROR_SOLUTIONS[code.value]["en"]

    def test_all_codes_sorted(self) -> None:
        codes = get_all_error_codes()
        assert codes == sorted(codes)
        assert "DETECT-001" in codes

    def test_codes_by_domain(self) -> None:
        assert get_error_codes_by_domain("CONFIG") == ["CONFIG-001", "CONFIG-002", "CONFIG-003"]
        assert get_error_codes_by_domain("INPUT") == ["INPUT-001", "INPUT-002"]

    def test_message_formatting(self) -> None:
        assert get_error_message("DETECT-001", lang="en", detector="names.honorific") == (
            "Detector failed: names.honorific"
        )

    def test_missing_format_key_kept(self) -> None:
        """컨텍스트에 없는 자리표시자는 그대로 남음"""
        assert get_error_message("DETECT-001", lang="ko") == "탐지기 실행 실패: {detector}"

    def test_unknown_code(self) -> None:
        with pytest.raises(KeyError):
            get_error_message("NOPE-001")

    def test_format_error_response(self) -> None:
        response = format_error_response("INPUT-001", lang="en", received_type="NoneType")

        assert response == {
            "error_code": "INPUT-001",
            "message": "Text to mask is not a valid string: NoneType",
            "solutions": ERROR_SOLUTIONS["INPUT-001"]["en"],
        }
        assert "solutions" not in format_error_response(
            "INPUT-001", lang="en", include_solutions=False, received_type="int"
        )


class TestExceptions:
    """예외 클래스 테스트"""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("INPUT-001", InvalidInputError),
            ("DETECT-001", DetectorFailure),
            ("CONFIG-002", ConfigError),
            ("GENERAL-001", GeneralError),
            ("UNKNOWN-001", MaskingException),
        ],
    )
    def test_exception_class_by_domain(self, code: str, expected: type) -> None:
        assert get_exception_class(code) is expected

    def test_exception_message_and_dict(self) -> None:
        error = InvalidInputError(ErrorCode.INPUT_001, received_type="NoneType")

        assert error.error_code == "INPUT-001"
        assert "NoneType" in str(error)
        assert error.to_dict(lang="en", include_solutions=False) == {
            "error_code": "INPUT-001",
            "message": "Text to mask is not a valid string: NoneType",
        }

    def test_wrap_exception(self) -> None:
        wrapped = wrap_exception(RuntimeError("boom"), ErrorCode.DETECT_001, detector="phone")

        assert isinstance(wrapped, DetectorFailure)
        assert wrapped.error_code == "DETECT-001"
        assert wrapped.context["original_error_type"] == "RuntimeError"
        assert wrapped.context["original_error_message"] == "boom"

    def test_wrap_keeps_masking_exception(self) -> None:
        original = ConfigError(ErrorCode.CONFIG_001, config_path="/tmp/x.yaml")
        assert wrap_exception(original, ErrorCode.DETECT_001) is original
