"""
화이트리스트 관리자 (WhitelistManager)

이름 탐지 오탐 방지 단어를 중앙에서 관리하는 모듈.
privacy.yaml의 privacy.whitelist와 동기화되며, 모든 이름 탐지 전략이 공유합니다.

주요 기능:
- YAML 설정 파일에서 화이트리스트 로드
- 런타임 화이트리스트 추가/제거
- 단어 존재 여부 확인
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from ....lib.config_loader import ConfigLoader
from ....lib.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = get_logger(__name__)


# ========================================
# 기본 화이트리스트 (설정 파일 로드 실패 시 폴백)
# ========================================
DEFAULT_WHITELIST: frozenset[str] = frozenset(
    [
        # 직함/호칭 (성씨로 시작하는 일반 명사)
        "고객",
        "대표",
        "이사",
        "부장",
        "과장",
        "사장",
        "교수",
        "박사",
        "주임",
        "전무",
        "상무",
        "원장",
        "회장",
        "차장",
        "강사",
        "신부",
        "진행자",
        "조사원",
        "고모",
        "장모",
        # 플레이스홀더/인터뷰 용어
        "이름",
        "이메일",
        "주소",
        "전화",
        "정보",
        "계좌",
        # 지명
        "서울",
        "부산",
        "대구",
        "인천",
        "광주",
        "대전",
        "울산",
        "세종",
        "강원",
        "제주",
        # 부사/대명사
        "정말",
        "진짜",
        "지금",
        "조금",
        "전혀",
        "우리",
        "이제",
        "이번",
        "이거",
        "이건",
        "이게",
        "이분",
        "한번",
        "오늘",
        "주로",
        "정도",
        "안녕",
        "하하",
        "오케이",
        "진행",
        "이상",
        "하나",
        # 직함 앞 수식어
        "지난",
        "이런",
        "이전",
        "현재",
        "전체",
        "전문",
        "전직",
        "현직",
        "한국",
        "유명",
    ]
)


class WhitelistManager:
    """
    이름 탐지 예외 화이트리스트 관리자

    YAML 설정 파일과 연동하여 화이트리스트를 중앙 관리합니다.

    사용 예시:
        >>> manager = WhitelistManager()
        >>> manager.contains("정말")  # True
        >>> manager.contains("김철수")  # False
    """

    # 설정 파일 기본 경로 (패키지 내장)
    DEFAULT_CONFIG_PATH = Path(__file__).parents[3] / "config" / "features" / "privacy.yaml"

    def __init__(
        self,
        config_path: str | Path | None = None,
        initial_words: Sequence[str] | None = None,
    ):
        """
        Args:
            config_path: privacy.yaml 설정 파일 경로 (None이면 기본 경로)
            initial_words: 초기 화이트리스트 단어 목록 (설정 파일 대신 직접 지정)
        """
        self._config_path = Path(config_path) if config_path else self.DEFAULT_CONFIG_PATH
        self._words: frozenset[str] = frozenset()
        self._loaded_from_config: bool = False

        # 초기화 순서: initial_words > config file > defaults
        if initial_words is not None:
            self._words = frozenset(initial_words)
            logger.info("화이트리스트 초기화 (직접 지정)", extra={"size": len(self._words)})
        else:
            self._load_from_config()

    def _load_from_config(self) -> None:
        """
        YAML 설정 파일에서 화이트리스트 로드

        실패 시 기본 화이트리스트 사용
        """
        self._loaded_from_config = False

        if not self._config_path.exists():
            logger.warning(
                "설정 파일 없음, 기본 화이트리스트 사용",
                extra={"config_path": str(self._config_path)},
            )
            self._words = DEFAULT_WHITELIST
            return

        try:
            with open(self._config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(
                "화이트리스트 로드 실패, 기본값 사용",
                extra={"config_path": str(self._config_path), "error": str(e)},
            )
            self._words = DEFAULT_WHITELIST
            return

        section = config.get("privacy", {}) if isinstance(config, dict) else {}
        whitelist = (section or {}).get("whitelist", [])

        if whitelist:
            self._words = frozenset(str(word) for word in whitelist)
            self._loaded_from_config = True
            logger.info(
                "화이트리스트 로드 성공",
                extra={"config_path": str(self._config_path), "size": len(self._words)},
            )
        else:
            logger.warning("설정 파일에 whitelist 없음, 기본값 사용")
            self._words = DEFAULT_WHITELIST

    @property
    def words(self) -> frozenset[str]:
        """화이트리스트 단어 집합 (읽기 전용)"""
        return self._words

    @property
    def loaded_from_config(self) -> bool:
        """설정 파일에서 로드되었는지 여부"""
        return self._loaded_from_config

    @property
    def config_path(self) -> Path:
        return self._config_path

    def contains(self, word: str) -> bool:
        return word in self._words

    def add_words(self, words: Iterable[str]) -> int:
        """
        화이트리스트에 단어 추가 (런타임)

        Returns:
            추가된 단어 수
        """
        before_count = len(self._words)
        self._words = self._words | frozenset(words)
        added_count = len(self._words) - before_count

        if added_count > 0:
            logger.info(
                "화이트리스트 단어 추가",
                extra={"added": added_count, "size": len(self._words)},
            )

        return added_count

    def remove_words(self, words: Iterable[str]) -> int:
        """
        화이트리스트에서 단어 제거 (런타임)

        Returns:
            제거된 단어 수
        """
        before_count = len(self._words)
        self._words = self._words - frozenset(words)
        removed_count = before_count - len(self._words)

        if removed_count > 0:
            logger.info(
                "화이트리스트 단어 제거",
                extra={"removed": removed_count, "size": len(self._words)},
            )

        return removed_count

    def reload(self) -> bool:
        """
        설정 파일에서 화이트리스트 다시 로드

        Returns:
            설정 파일에서 로드되었는지 여부
        """
        before_count = len(self._words)
        self._load_from_config()

        if before_count != len(self._words):
            logger.info(
                "화이트리스트 리로드",
                extra={"before": before_count, "after": len(self._words)},
            )

        return self._loaded_from_config

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def to_list(self) -> list[str]:
        """화이트리스트를 정렬된 리스트로 반환"""
        return sorted(self._words)


# ========================================
# 싱글톤 인스턴스 (선택적 사용)
# ========================================
_default_manager: WhitelistManager | None = None


def get_whitelist_manager() -> WhitelistManager:
    """
    기본 WhitelistManager 싱글톤 인스턴스 반환

    load_config()와 같은 파일(PII_MASKING_CONFIG 또는 패키지 기본 파일)을 읽습니다.
    """
    global _default_manager
    if _default_manager is None:
        _default_manager = WhitelistManager(config_path=ConfigLoader().config_path)
    return _default_manager


def reset_whitelist_manager() -> None:
    """싱글톤 인스턴스 리셋 (테스트용)"""
    global _default_manager
    _default_manager = None
