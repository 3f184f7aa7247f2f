"""
WhitelistManager 단위 테스트

YAML 설정 로드, 기본값 폴백, 런타임 추가/제거 검증.
"""

from pathlib import Path

import pytest

from pii_masking.modules.core.privacy import (
    DEFAULT_WHITELIST,
    WhitelistManager,
    get_whitelist_manager,
    reset_whitelist_manager,
)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """화이트리스트 두 단어를 가진 설정 파일"""
    path = tmp_path / "privacy.yaml"
    path.write_text("privacy:\n  whitelist:\n    - 정말\n    - 진짜\n", encoding="utf-8")
    return path


class TestWhitelistLoading:
    """설정 파일 로드 테스트"""

    def test_load_from_yaml(self, config_file: Path) -> None:
        manager = WhitelistManager(config_path=config_file)

        assert manager.words == frozenset({"정말", "진짜"})
        assert manager.loaded_from_config is True

    def test_packaged_default_config(self) -> None:
        manager = WhitelistManager()

        assert manager.loaded_from_config is True
        assert "정말" in manager
        assert "김철수" not in manager

    def test_missing_file_falls_back(self, tmp_path: Path) -> None:
        manager = WhitelistManager(config_path=tmp_path / "missing.yaml")

        assert manager.words == DEFAULT_WHITELIST
        assert manager.loaded_from_config is False

    def test_broken_yaml_falls_back(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("privacy: [whitelist\n", encoding="utf-8")

        manager = WhitelistManager(config_path=path)

        assert manager.words == DEFAULT_WHITELIST
        assert manager.loaded_from_config is False

    def test_section_without_whitelist_falls_back(self, tmp_path: Path) -> None:
        path = tmp_path / "privacy.yaml"
        path.write_text("privacy:\n  min_name_confidence: high\n", encoding="utf-8")

        assert WhitelistManager(config_path=path).words == DEFAULT_WHITELIST

    def test_initial_words_take_precedence(self, config_file: Path) -> None:
        manager = WhitelistManager(config_path=config_file, initial_words=["오늘"])

        assert manager.to_list() == ["오늘"]
        assert manager.loaded_from_config is False


class TestWhitelistMutation:
    """런타임 추가/제거/리로드 테스트"""

    def test_add_and_remove(self, config_file: Path) -> None:
        manager = WhitelistManager(config_path=config_file)

        assert manager.add_words(["오늘", "정말"]) == 1
        assert manager.contains("오늘")
        assert manager.remove_words(["오늘", "없는단어"]) == 1
        assert len(manager) == 2

    def test_reload_reads_file_again(self, config_file: Path) -> None:
        manager = WhitelistManager(config_path=config_file)
        manager.add_words(["임시"])

        config_file.write_text("privacy:\n  whitelist:\n    - 하나\n", encoding="utf-8")

        assert manager.reload() is True
        assert sorted(manager) == ["하나"]

    def test_contains_ignores_non_strings(self, config_file: Path) -> None:
        manager = WhitelistManager(config_path=config_file)
        assert 123 not in manager


class TestWhitelistSingleton:
    def test_singleton(self) -> None:
        first = get_whitelist_manager()
        assert get_whitelist_manager() is first

        reset_whitelist_manager()
        assert get_whitelist_manager() is not first
