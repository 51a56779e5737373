"""
tests/core/test_core_config.py - core/config.py 테스트
"""

from unittest.mock import patch

import pytest

from core.config import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RETRY_MODE,
    AwareConfig,
    get_version,
    parse_tag,
)
from core.exceptions import ConfigError, ValidationError


class TestParseTag:
    """parse_tag 테스트"""

    def test_key_value(self):
        assert parse_tag("Environment=prod") == ("Environment", "prod")

    def test_empty_value(self):
        """값은 비어 있어도 됨"""
        assert parse_tag("Env=") == ("Env", "")

    def test_value_with_equals(self):
        """첫 번째 '='에서만 분리"""
        assert parse_tag("Query=a=b") == ("Query", "a=b")

    def test_missing_separator(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_tag("Environment")

        assert exc_info.value.field == "tag"

    def test_empty_key(self):
        with pytest.raises(ValidationError):
            parse_tag("=prod")


class TestAwareConfig:
    """AwareConfig 데이터클래스 테스트"""

    def test_default_values(self):
        """기본값 확인"""
        config = AwareConfig()

        assert config.regions == []
        assert config.vpc_ids == []
        assert config.tags == []
        assert config.group_by == "vpc"
        assert config.profile is None
        assert config.max_attempts == DEFAULT_MAX_ATTEMPTS
        assert config.retry_mode == DEFAULT_RETRY_MODE

    def test_invalid_group_by(self):
        with pytest.raises(ValidationError) as exc_info:
            AwareConfig(group_by="stack")

        assert exc_info.value.field == "group_by"

    def test_invalid_retry_mode(self):
        with pytest.raises(ValidationError):
            AwareConfig(retry_mode="aggressive")

    def test_invalid_max_attempts(self):
        with pytest.raises(ValidationError):
            AwareConfig(max_attempts=0)


class TestFromEnv:
    """AwareConfig.from_env 테스트"""

    def test_reads_environment(self, monkeypatch):
        """AWARE_ 환경 변수에서 기본값 로드"""
        monkeypatch.setenv("AWARE_REGIONS", "ap-northeast-2, us-east-1,")
        monkeypatch.setenv("AWARE_PROFILE", "dev")
        monkeypatch.setenv("AWARE_MAX_ATTEMPTS", "8")
        monkeypatch.setenv("AWARE_RETRY_MODE", "standard")

        config = AwareConfig.from_env()

        assert config.regions == ["ap-northeast-2", "us-east-1"]
        assert config.profile == "dev"
        assert config.max_attempts == 8
        assert config.retry_mode == "standard"

    def test_overrides_win(self, monkeypatch):
        """명시적 인자가 환경 변수보다 우선"""
        monkeypatch.setenv("AWARE_REGIONS", "us-east-1")
        monkeypatch.setenv("AWARE_PROFILE", "dev")

        config = AwareConfig.from_env(regions=("eu-west-1",), profile="prod")

        assert config.regions == ["eu-west-1"]
        assert config.profile == "prod"

    def test_empty_overrides_ignored(self, monkeypatch):
        """None / 빈 컬렉션 인자는 무시"""
        monkeypatch.setenv("AWARE_REGIONS", "us-east-1")

        config = AwareConfig.from_env(regions=(), profile=None, vpc_ids=["vpc-1"])

        assert config.regions == ["us-east-1"]
        assert config.profile is None
        assert config.vpc_ids == ["vpc-1"]

    def test_tuples_become_lists(self):
        config = AwareConfig.from_env(vpc_ids=("vpc-1", "vpc-2"), stack_names=("a",))

        assert config.vpc_ids == ["vpc-1", "vpc-2"]
        assert config.stack_names == ["a"]

    def test_invalid_int(self, monkeypatch):
        monkeypatch.setenv("AWARE_MAX_ATTEMPTS", "many")

        with pytest.raises(ConfigError) as exc_info:
            AwareConfig.from_env()

        assert exc_info.value.config_key == "AWARE_MAX_ATTEMPTS"

    def test_invalid_retry_mode_env(self, monkeypatch):
        monkeypatch.setenv("AWARE_RETRY_MODE", "fast")

        with pytest.raises(ValidationError):
            AwareConfig.from_env()


class TestGetVersion:
    """get_version 테스트"""

    def test_installed(self):
        with patch("core.config.version", return_value="1.2.3"):
            assert get_version() == "1.2.3"

    def test_not_installed(self):
        from importlib.metadata import PackageNotFoundError

        with patch("core.config.version", side_effect=PackageNotFoundError("aware")):
            assert get_version() == "0.0.0"
