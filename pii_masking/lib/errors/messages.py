"""에러 메시지 및 해결 방법 저장소.

모든 에러 메시지를 한국어와 영어로 저장하며,
각 에러에 대한 해결 방법도 제공합니다.
"""


# 에러 메시지 저장소: {error_code: {"ko": "한국어 메시지", "en": "English message"}}
ERROR_MESSAGES: dict[str, dict[str, str]] = {
    # INPUT (입력 검증)
    "INPUT-001": {
        "ko": "마스킹 대상 텍스트가 유효하지 않습니다: {received_type}",
        "en": "Text to mask is not a valid string: {received_type}",
    },
    "INPUT-002": {
        "ko": "마스킹 옵션이 유효하지 않습니다: {option}={value}",
        "en": "Invalid masking option: {option}={value}",
    },
    # DETECT (탐지기)
    "DETECT-001": {
        "ko": "탐지기 실행 실패: {detector}",
        "en": "Detector failed: {detector}",
    },
    # VALIDATION (품질 검증)
    "VALIDATION-001": {
        "ko": "마스킹 결과 품질 경고: 보존 비율 {preserved_ratio}, 가독성 {readability}",
        "en": "Masking quality warning: preserved ratio {preserved_ratio}, readability {readability}",
    },
    # CONFIG (설정 관리)
    "CONFIG-001": {
        "ko": "설정 파일을 찾을 수 없습니다: {config_path}",
        "en": "Configuration file not found: {config_path}",
    },
    "CONFIG-002": {
        "ko": "설정 파일 YAML 파싱 실패: {config_path}",
        "en": "Failed to parse configuration YAML: {config_path}",
    },
    "CONFIG-003": {
        "ko": "설정 검증 실패: {validation_errors}",
        "en": "Configuration validation failed: {validation_errors}",
    },
    # GENERAL (일반)
    "GENERAL-001": {
        "ko": "예상하지 못한 오류가 발생했습니다",
        "en": "An unexpected error occurred",
    },
}


# 에러 해결 방법 저장소: {error_code: {"ko": [...], "en": [...]}}
ERROR_SOLUTIONS: dict[str, dict[str, list[str]]] = {
    "INPUT-001": {
        "ko": [
            "마스킹 함수에는 str 타입 텍스트를 전달하세요",
            "파일 입력은 호출 전에 텍스트로 디코딩하세요",
        ],
        "en": [
            "Pass a str value to the masking function",
            "Decode file input to text before calling",
        ],
    },
    "INPUT-002": {
        "ko": [
            "카테고리 이름은 phone, email, national_id 등 정의된 값을 사용하세요",
            "신뢰도는 high, medium, low 중 하나를 사용하세요",
        ],
        "en": [
            "Use a defined category name such as phone, email, national_id",
            "Use one of high, medium, low for confidence",
        ],
    },
    "DETECT-001": {
        "ko": [
            "서버 로그에서 실패한 탐지기 이름을 확인하세요",
            "나머지 탐지기의 마스킹 결과는 정상 반영되었습니다",
        ],
        "en": [
            "Check server logs for the failing detector name",
            "Results from the remaining detectors were still applied",
        ],
    },
    "VALIDATION-001": {
        "ko": [
            "원문에 개인정보가 과도하게 포함되어 있지 않은지 확인하세요",
            "이름 탐지 신뢰도를 high로 올려 과탐지를 줄이세요",
        ],
        "en": [
            "Check whether the source text is dominated by personal data",
            "Raise the name confidence to high to reduce over-masking",
        ],
    },
    "CONFIG-001": {
        "ko": [
            "PII_MASKING_CONFIG 환경 변수의 경로를 확인하세요",
            "기본 설정 파일(config/features/privacy.yaml)이 존재하는지 확인하세요",
        ],
        "en": [
            "Check the path in the PII_MASKING_CONFIG environment variable",
            "Verify the default config/features/privacy.yaml exists",
        ],
    },
    "CONFIG-002": {
        "ko": [
            "YAML 문법(들여쓰기, 콜론)을 확인하세요",
        ],
        "en": [
            "Check YAML syntax (indentation, colons)",
        ],
    },
    "CONFIG-003": {
        "ko": [
            "설정 값의 타입과 허용 범위를 확인하세요",
            "min_name_confidence는 high, medium, low 중 하나여야 합니다",
        ],
        "en": [
            "Check value types and allowed ranges",
            "min_name_confidence must be one of high, medium, low",
        ],
    },
    "GENERAL-001": {
        "ko": [
            "서버 로그를 확인하여 자세한 오류를 파악하세요",
        ],
        "en": [
            "Check server logs for detailed error information",
        ],
    },
}


def get_message_template(error_code: str, lang: str = "ko") -> str:
    """에러 메시지 템플릿 가져오기.

    Args:
        error_code: 에러 코드 (예: "INPUT-001")
        lang: 언어 코드 ("ko" 또는 "en")

    Returns:
        에러 메시지 템플릿 문자열

    Raises:
        KeyError: 에러 코드가 존재하지 않는 경우
        ValueError: 지원하지 않는 언어 코드인 경우
    """
    if error_code not in ERROR_MESSAGES:
        raise KeyError(f"Unknown error code: {error_code}")

    if lang not in ("ko", "en"):
        raise ValueError(f"Unsupported language: {lang}")

    return ERROR_MESSAGES[error_code][lang]


def get_solutions_list(error_code: str, lang: str = "ko") -> list[str]:
    """에러 해결 방법 목록 가져오기.

    Raises:
        KeyError: 에러 코드가 존재하지 않는 경우
        ValueError: 지원하지 않는 언어 코드인 경우
    """
    if error_code not in ERROR_SOLUTIONS:
        raise KeyError(f"Unknown error code: {error_code}")

    if lang not in ("ko", "en"):
        raise ValueError(f"Unsupported language: {lang}")

    return ERROR_SOLUTIONS[error_code][lang]
