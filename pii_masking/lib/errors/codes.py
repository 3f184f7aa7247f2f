"""에러 코드 정의 모듈.

PII 마스킹 시스템의 에러 코드를 Enum으로 정의합니다.
도메인별로 그룹화되어 있어 에러 분류 및 추적이 용이합니다.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """PII 마스킹 에러 코드 Enum.

    형식: {DOMAIN}-{NUMBER}
    - INPUT: 입력 검증
    - DETECT: 탐지기 내부 오류
    - VALIDATION: 마스킹 품질 검증
    - CONFIG: 설정 관리
    - GENERAL: 일반 오류
    """

    # INPUT (입력 검증) - 2개
    INPUT_001 = "INPUT-001"  # 텍스트가 None이거나 문자열이 아님
    INPUT_002 = "INPUT-002"  # 마스킹 옵션 값이 유효하지 않음

    # DETECT (탐지기) - 1개
    DETECT_001 = "DETECT-001"  # 개별 탐지 전략 실행 중 예외

    # VALIDATION (품질 검증) - 1개
    VALIDATION_001 = "VALIDATION-001"  # 가독성 낮음 또는 보존 비율 범위 이탈

    # CONFIG (설정 관리) - 3개
    CONFIG_001 = "CONFIG-001"  # 설정 파일 없음
    CONFIG_002 = "CONFIG-002"  # YAML 파싱 실패
    CONFIG_003 = "CONFIG-003"  # 스키마 검증 실패

    # GENERAL (일반) - 1개
    GENERAL_001 = "GENERAL-001"  # 예상하지 못한 오류
