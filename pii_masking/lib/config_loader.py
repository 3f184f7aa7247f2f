"""
Configuration loader for PII masking
YAML 기반 설정 로더 + Pydantic 검증

로드 순서:
1. .env 파일 (python-dotenv)
2. privacy.yaml (PII_MASKING_CONFIG 환경 변수 또는 패키지 기본 파일)
3. 환경 변수 오버라이드 (PII_MASKING_MIN_NAME_CONFIDENCE 등)
4. PrivacyConfig 스키마 검증 (${ENV_VAR:-default} 치환은 BaseConfig가 담당)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from ..config.schemas import PrivacyConfig
from .errors import ConfigError, ErrorCode
from .logger import get_logger

logger = get_logger(__name__)


class ConfigLoader:
    """설정 로더 클래스"""

    DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "features" / "privacy.yaml"

    # 환경 변수 → privacy 섹션 키 매핑
    ENV_OVERRIDES: dict[str, str] = {
        "PII_MASKING_MIN_NAME_CONFIDENCE": "min_name_confidence",
    }

    def __init__(
        self,
        config_path: str | Path | None = None,
        env_file: str | Path | None = None,
    ) -> None:
        """
        Args:
            config_path: privacy.yaml 경로 (None이면 PII_MASKING_CONFIG 또는 기본 파일)
            env_file: .env 파일 경로 (None이면 현재 작업 디렉토리의 .env)
        """
        env_path = Path(env_file) if env_file else Path.cwd() / ".env"
        if env_path.exists():
            load_dotenv(env_path)

        if config_path is not None:
            self.config_path = Path(config_path)
            self._explicit = True
        elif os.getenv("PII_MASKING_CONFIG"):
            self.config_path = Path(os.environ["PII_MASKING_CONFIG"])
            self._explicit = True
        else:
            self.config_path = self.DEFAULT_CONFIG_PATH
            self._explicit = False

    def load_config(self) -> PrivacyConfig:
        """
        설정 로드 및 검증

        Returns:
            검증된 PrivacyConfig

        Raises:
            ConfigError: 명시적으로 지정한 파일이 없거나, YAML 파싱/스키마 검증 실패
        """
        if not self.config_path.exists():
            if self._explicit:
                raise ConfigError(ErrorCode.CONFIG_001, config_path=str(self.config_path))
            logger.warning(
                "설정 파일 없음, 기본값 사용",
                extra={"config_path": str(self.config_path)},
            )
            raw: dict[str, Any] = {}
        else:
            raw = self._load_yaml_file(self.config_path)

        section = raw.get("privacy", {}) or {}
        section = self._apply_env_overrides(section)

        try:
            config = PrivacyConfig(**section)
        except ValidationError as e:
            raise ConfigError(ErrorCode.CONFIG_003, validation_errors=str(e)) from e

        logger.info(
            "개인정보 마스킹 설정 로드 완료",
            extra={
                "config_path": str(self.config_path),
                "enabled_categories": len(config.enabled_categories),
                "min_name_confidence": config.min_name_confidence,
                "whitelist_size": len(config.whitelist),
            },
        )
        return config

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """YAML 파일 로드"""
        try:
            with open(file_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(ErrorCode.CONFIG_002, config_path=str(file_path)) from e

        if not isinstance(config, dict):
            raise ConfigError(ErrorCode.CONFIG_002, config_path=str(file_path))
        return config

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """환경 변수 오버라이드 적용"""
        overridden = dict(config)
        for env_var, key in self.ENV_OVERRIDES.items():
            value = os.getenv(env_var)
            if value is not None:
                overridden[key] = value
        return overridden


def load_config(config_path: str | Path | None = None) -> PrivacyConfig:
    """
    전역 설정 로드 함수

    Examples:
        >>> config = load_config()
        >>> config.min_name_confidence
        'medium'
    """
    return ConfigLoader(config_path).load_config()
