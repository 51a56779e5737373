"""
core/config.py - 중앙 설정 관리

수집 범위(리전, VPC, 태그, 스택)와 AWS 클라이언트 설정을 한 곳에 모읍니다.
환경 변수(AWARE_ 접두어)로 기본값을 지정하고, CLI 옵션이 이를 덮어씁니다.

환경 변수:
    AWARE_REGIONS: 콤마로 구분된 리전 목록 (예: "ap-northeast-2,us-east-1")
    AWARE_PROFILE: AWS 프로파일 이름
    AWARE_MAX_ATTEMPTS: API 최대 시도 횟수 (기본: 5)
    AWARE_RETRY_MODE: botocore 재시도 모드 (legacy, standard, adaptive)

Usage:
    from core.config import AwareConfig, parse_tag

    config = AwareConfig.from_env(
        regions=["ap-northeast-2"],
        tags=[parse_tag("Environment=prod")],
    )
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version

from core.exceptions import ConfigError, ValidationError

logger = logging.getLogger(__name__)

PACKAGE_NAME = "aware"
ENV_PREFIX = "AWARE_"

# 기본 클라이언트 설정
DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_RETRY_MODE = "adaptive"  # adaptive: 동적 조정, standard: 고정
DEFAULT_CONNECT_TIMEOUT = 10  # 초
DEFAULT_READ_TIMEOUT = 30  # 초

RETRY_MODES = ("legacy", "standard", "adaptive")
GROUP_BY_CHOICES = ("vpc", "tag")


def get_version() -> str:
    """설치된 패키지 버전 반환 (미설치 시 0.0.0)"""
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "0.0.0"


def parse_tag(text: str) -> tuple[str, str]:
    """'Key=Value' 문자열을 (key, value) 튜플로 변환

    첫 번째 '='에서만 분리하므로 값에 '='이 포함될 수 있습니다.
    값은 비어 있어도 됩니다 ("Env=").

    Args:
        text: 태그 문자열

    Returns:
        (key, value) 튜플

    Raises:
        ValidationError: '='이 없거나 키가 비어 있는 경우
    """
    key, sep, value = text.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ValidationError("tag", text, "KEY=VALUE")
    return key, value


def _env_list(name: str) -> list[str]:
    raw = os.getenv(ENV_PREFIX + name, "").strip()
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(ENV_PREFIX + name, f"정수가 아닙니다: {raw!r}", cause=e) from e


@dataclass
class AwareConfig:
    """수집 설정

    Attributes:
        regions: 대상 리전 (비어 있으면 활성화된 전체 리전)
        vpc_ids: 대상 VPC ID (비어 있으면 전체 VPC)
        tags: (key, value) 태그 필터, 모든 태그가 일치해야 함
        stack_names: 대상 CloudFormation 스택 이름 또는 ID
        group_by: EC2 트리 그룹 기준 ("vpc" 또는 "tag")
        profile: AWS 프로파일 이름 (None이면 기본 자격 증명 체인)
        max_attempts: API 최대 시도 횟수 (SDK 재시도)
        retry_mode: botocore 재시도 모드
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        plain: rich 대신 일반 텍스트로 트리 출력
        quiet: 진행 표시 생략
        debug: 디버그 로그 출력
    """

    regions: list[str] = field(default_factory=list)
    vpc_ids: list[str] = field(default_factory=list)
    tags: list[tuple[str, str]] = field(default_factory=list)
    stack_names: list[str] = field(default_factory=list)
    group_by: str = "vpc"
    profile: str | None = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retry_mode: str = DEFAULT_RETRY_MODE
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT
    read_timeout: int = DEFAULT_READ_TIMEOUT
    plain: bool = False
    quiet: bool = False
    debug: bool = False

    def __post_init__(self) -> None:
        if self.group_by not in GROUP_BY_CHOICES:
            raise ValidationError("group_by", self.group_by, " | ".join(GROUP_BY_CHOICES))
        if self.retry_mode not in RETRY_MODES:
            raise ValidationError("retry_mode", self.retry_mode, " | ".join(RETRY_MODES))
        if self.max_attempts < 1:
            raise ValidationError("max_attempts", self.max_attempts, ">= 1")

    @classmethod
    def from_env(cls, **overrides) -> AwareConfig:
        """환경 변수 기본값 + 명시적 인자로 설정 생성

        None 또는 빈 컬렉션인 인자는 무시되어 환경 변수 값이 유지됩니다.

        Raises:
            ConfigError: 환경 변수 값이 잘못된 경우
        """
        values = {
            "regions": _env_list("REGIONS"),
            "profile": os.getenv(ENV_PREFIX + "PROFILE") or None,
            "max_attempts": _env_int("MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
            "retry_mode": os.getenv(ENV_PREFIX + "RETRY_MODE") or DEFAULT_RETRY_MODE,
        }

        for key, value in overrides.items():
            if value is None:
                continue
            if isinstance(value, (list, tuple)) and not value:
                continue
            values[key] = list(value) if isinstance(value, tuple) else value

        config = cls(**values)
        logger.debug(f"설정 로드: {config}")
        return config
