"""에러 메시지 포맷팅 유틸리티.

메시지 템플릿에 컨텍스트를 채워 넣고, 해결 방법과 함께 응답 딕셔너리로 묶습니다.
CLI 표준 에러 출력과 ValidationWarning 레코드가 같은 형식을 사용합니다.
"""

import os
from typing import Any

from pii_masking.lib.errors.messages import (
    ERROR_MESSAGES,
    get_message_template,
    get_solutions_list,
)

SUPPORTED_LANGUAGES: tuple[str, ...] = ("ko", "en")


class _KeepMissing(dict[str, Any]):
    """템플릿에 없는 키는 "{key}" 그대로 남김"""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def get_default_language() -> str:
    """기본 언어 (ERROR_LANGUAGE 환경 변수, 기본 "ko")"""
    lang = os.getenv("ERROR_LANGUAGE", "ko").lower()
    return lang if lang in SUPPORTED_LANGUAGES else "ko"


def _resolve_language(lang: str | None) -> str:
    return get_default_language() if lang is None else lang


def get_error_message(error_code: str, lang: str | None = None, **kwargs: Any) -> str:
    """에러 메시지 가져오기 (포맷팅 포함).

    컨텍스트에 없는 자리표시자는 치환하지 않고 남겨 둡니다.

    Args:
        error_code: 에러 코드 (예: "INPUT-001")
        lang: 언어 코드 ("ko" 또는 "en"). None이면 기본 언어 사용
        **kwargs: 메시지 포맷팅에 사용할 키워드 인자

    Example:
        >>> get_error_message("DETECT-001", lang="en", detector="names.honorific")
        'Detector failed: names.honorific'
    """
    template = get_message_template(error_code, _resolve_language(lang))
    return template.format_map(_KeepMissing(kwargs))


def get_error_solutions(error_code: str, lang: str | None = None) -> list[str]:
    """에러 해결 방법 가져오기."""
    return list(get_solutions_list(error_code, _resolve_language(lang)))


def format_error_response(
    error_code: str,
    lang: str | None = None,
    include_solutions: bool = True,
    **context: Any,
) -> dict[str, Any]:
    """에러 응답 딕셔너리 생성.

    Returns:
        {"error_code": ..., "message": ..., "solutions": [...]}
    """
    lang = _resolve_language(lang)
    response: dict[str, Any] = {
        "error_code": error_code,
        "message": get_error_message(error_code, lang, **context),
    }
    if include_solutions:
        response["solutions"] = get_error_solutions(error_code, lang)
    return response


def get_all_error_codes() -> list[str]:
    """모든 에러 코드 (정렬)"""
    return sorted(ERROR_MESSAGES)


def get_error_codes_by_domain(domain: str) -> list[str]:
    """특정 도메인의 에러 코드 목록.

    Example:
        >>> get_error_codes_by_domain("CONFIG")
        ['CONFIG-001', 'CONFIG-002', 'CONFIG-003']
    """
    prefix = f"{domain.upper()}-"
    return [code for code in get_all_error_codes() if code.startswith(prefix)]
