"""
개인정보 마스킹 설정 테스트

PrivacyConfig 스키마 검증 + ConfigLoader(YAML/.env/환경 변수) 로드 검증.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from pii_masking.config.schemas import ALL_CATEGORY_NAMES, PrivacyConfig, QualityConfig
from pii_masking.lib.config_loader import ConfigLoader, load_config
from pii_masking.lib.errors import ConfigError
from pii_masking.modules.core.privacy import ConfidenceTier, PIICategory, RedactionOptions


def _write_yaml(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "privacy.yaml"
    path.write_text(body, encoding="utf-8")
    return path


# ========================================
# 스키마
# ========================================
class TestPrivacyConfigSchema:
    """PrivacyConfig 스키마 테스트"""

    def test_defaults(self) -> None:
        config = PrivacyConfig()

        assert config.enabled_categories == ALL_CATEGORY_NAMES
        assert config.min_name_confidence == "medium"
        assert config.whitelist == []
        assert config.quality.min_preserved_ratio == 0.5
        assert config.quality.max_preserved_ratio == 1.5

    def test_category_names_match_enum(self) -> None:
        assert set(ALL_CATEGORY_NAMES) == {c.value for c in PIICategory}

    def test_confidence_is_normalized(self) -> None:
        assert PrivacyConfig(min_name_confidence=" HIGH ").min_name_confidence == "high"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_name_confidence": "certain"},
            {"enabled_categories": ["phone", "fax"]},
            {"extra_surnames": ["남궁"]},
            {"extra_surnames": ["K"]},
            {"extra_titles": [""]},
            {"extra_titles": ["원장", "   "]},
        ],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        with pytest.raises(ValidationError):
            PrivacyConfig(**kwargs)

    def test_titles_are_stripped(self) -> None:
        assert PrivacyConfig(extra_titles=[" 소장님 "]).extra_titles == ["소장님"]

    def test_quality_thresholds_must_be_ordered(self) -> None:
        with pytest.raises(ValidationError):
            QualityConfig(min_preserved_ratio=1.5, max_preserved_ratio=0.5)
        with pytest.raises(ValidationError):
            QualityConfig(low_density_threshold=0.2, medium_density_threshold=0.3)

    def test_env_placeholder_in_field(self) -> None:
        with patch.dict(os.environ, {"PII_NAME_CONFIDENCE": "low"}):
            config = PrivacyConfig(min_name_confidence="${PII_NAME_CONFIDENCE:-medium}")
        assert config.min_name_confidence == "low"

    def test_env_reference_in_list(self) -> None:
        with patch.dict(os.environ, {"EXTRA_WORD": "오늘"}):
            config = PrivacyConfig(whitelist=["정말", "${EXTRA_WORD}", "${MISSING_WORD:-진짜}"])
        assert config.whitelist == ["정말", "오늘", "진짜"]

    def test_to_dict(self) -> None:
        data = PrivacyConfig(min_name_confidence="low").to_dict()

        assert data["min_name_confidence"] == "low"
        assert data["quality"]["max_preserved_ratio"] == 1.5

    def test_options_from_config(self) -> None:
        config = PrivacyConfig(enabled_categories=["phone", "person_name"], min_name_confidence="high")
        options = RedactionOptions.from_config(config)

        assert options.enabled_categories == frozenset({PIICategory.PHONE, PIICategory.PERSON_NAME})
        assert options.min_name_confidence == ConfidenceTier.HIGH


# ========================================
# 로더
# ========================================
class TestConfigLoader:
    """ConfigLoader 테스트"""

    def test_packaged_default(self) -> None:
        config = load_config()

        assert config.min_name_confidence == "medium"
        assert "정말" in config.whitelist
        assert config.enabled_categories == ALL_CATEGORY_NAMES

    def test_load_from_path(self, tmp_path: Path) -> None:
        path = _write_yaml(
            tmp_path,
            "privacy:\n"
            "  enabled_categories: [phone, email]\n"
            "  min_name_confidence: high\n"
            "  extra_surnames: [탁]\n",
        )

        config = ConfigLoader(config_path=path).load_config()

        assert config.enabled_categories == ["phone", "email"]
        assert config.min_name_confidence == "high"
        assert config.extra_surnames == ["탁"]

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        config = ConfigLoader(config_path=_write_yaml(tmp_path, "")).load_config()
        assert config == PrivacyConfig()

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.yaml")
        assert exc_info.value.error_code == "CONFIG-001"

    def test_yaml_parse_error(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path, "privacy: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.error_code == "CONFIG-002"

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(_write_yaml(tmp_path, "- just\n- a list\n"))
        assert exc_info.value.error_code == "CONFIG-002"

    def test_schema_error(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path, "privacy:\n  min_name_confidence: sometimes\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.error_code == "CONFIG-003"

    def test_env_var_substitution(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path, 'privacy:\n  min_name_confidence: "${PII_NAME_CONFIDENCE:-medium}"\n')

        with patch.dict(os.environ, {"PII_NAME_CONFIDENCE": "high"}):
            assert load_config(path).min_name_confidence == "high"
        assert load_config(path).min_name_confidence == "medium"

    def test_env_reference_in_nested_section(self, tmp_path: Path) -> None:
        path = _write_yaml(
            tmp_path,
            "privacy:\n"
            "  min_name_confidence: \"${PII_NAME_CONFIDENCE}\"\n"
            "  quality:\n"
            "    min_preserved_ratio: \"${PII_MIN_RATIO:-0.4}\"\n",
        )

        with patch.dict(os.environ, {"PII_NAME_CONFIDENCE": " HIGH "}):
            config = load_config(path)

        assert config.min_name_confidence == "high"
        assert config.quality.min_preserved_ratio == 0.4

    def test_env_override(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path, "privacy:\n  min_name_confidence: high\n")

        with patch.dict(os.environ, {"PII_MASKING_MIN_NAME_CONFIDENCE": "low"}):
            assert load_config(path).min_name_confidence == "low"

    def test_config_path_from_env(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path, "privacy:\n  enabled_categories: [email]\n")

        with patch.dict(os.environ, {"PII_MASKING_CONFIG": str(path)}):
            assert load_config().enabled_categories == ["email"]

    def test_dotenv_file(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path, "privacy:\n  min_name_confidence: high\n")
        env_file = tmp_path / ".env"
        env_file.write_text("PII_MASKING_MIN_NAME_CONFIDENCE=low\n", encoding="utf-8")

        with patch.dict(os.environ):
            config = ConfigLoader(config_path=path, env_file=env_file).load_config()

        assert config.min_name_confidence == "low"
