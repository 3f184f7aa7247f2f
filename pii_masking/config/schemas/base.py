"""
Pydantic 기본 설정 클래스

모든 설정 스키마의 부모 클래스입니다.
YAML 값 안의 ${ENV_VAR} / ${ENV_VAR:-default} 참조를 검증 전에 치환합니다.
"""

import os
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

_ENV_REFERENCE = re.compile(r"^\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>.*))?\}$")


def resolve_env_reference(value: Any) -> Any:
    """
    "${NAME}" 또는 "${NAME:-default}" 형태의 문자열을 환경 변수 값으로 치환

    리스트는 항목별로 치환합니다 (whitelist 등). 그 밖의 값은 그대로 반환합니다.
    """
    if isinstance(value, list):
        return [resolve_env_reference(item) for item in value]
    if not isinstance(value, str):
        return value

    match = _ENV_REFERENCE.match(value)
    if match is None:
        return value
    return os.getenv(match.group("name"), match.group("default") or "")


class BaseConfig(BaseModel):
    """
    모든 설정 스키마의 기본 클래스

    기능:
    - 환경 변수 참조 치환
    - 추가 필드 허용 (YAML에 설명용 키가 있어도 로드)
    - 할당 시 재검증
    """

    model_config = ConfigDict(
        extra="allow",
        validate_assignment=True,
        populate_by_name=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def substitute_env_vars(cls, value: Any) -> Any:
        """
        Examples:
            min_name_confidence: "${PII_NAME_CONFIDENCE:-medium}"
        """
        return resolve_env_reference(value)

    def to_dict(self) -> dict[str, Any]:
        """설정 → dict (리포트/디버그 출력용)"""
        return self.model_dump(by_alias=True, exclude_none=True)
