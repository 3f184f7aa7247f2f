"""
테스트 공통 설정 및 픽스처

pytest conftest.py - 모든 테스트에서 공유되는 설정과 픽스처 정의.
"""

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# 프로젝트 루트 경로를 sys.path에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def pytest_configure(config: pytest.Config) -> None:
    """
    pytest 설정 훅

    테스트 환경 명시 + 사용자 환경 설정이 기본 설정을 덮어쓰지 않도록 정리.
    """
    os.environ["ENVIRONMENT"] = "test"
    for var in ("PII_MASKING_CONFIG", "PII_MASKING_MIN_NAME_CONFIDENCE", "PII_NAME_CONFIDENCE"):
        os.environ.pop(var, None)


@pytest.fixture(scope="session")
def project_root_path() -> Path:
    """프로젝트 루트 경로"""
    return project_root


@pytest.fixture(autouse=True)
def reset_singletons() -> Iterator[None]:
    """모듈 싱글톤 초기화 (테스트 간 상태 공유 방지)"""
    from pii_masking.modules.core.privacy import (
        reset_pii_processor,
        reset_redaction_engine,
        reset_whitelist_manager,
    )

    yield

    reset_pii_processor()
    reset_redaction_engine()
    reset_whitelist_manager()


@pytest.fixture(scope="session")
def engine():
    """기본 RedactionEngine (기본 화이트리스트, 이름 MEDIUM 이상)"""
    from pii_masking.modules.core.privacy import RedactionEngine

    return RedactionEngine()
