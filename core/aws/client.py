"""
core/aws/client.py - boto3 session/client 생성 헬퍼

Retry + 타임아웃이 설정된 boto3 client를 생성합니다.
재시도 정책은 botocore가 제공하는 retry mode를 그대로 사용합니다.

주요 구성 요소:
- create_session: 프로파일 기반 boto3 Session 생성
- get_client: retry 설정이 적용된 boto3 client 생성
- client_from_config: AwareConfig 값으로 client 생성

Example:
    from core.aws.client import get_client

    # 기본 설정 (adaptive retry, max 5회)
    ec2 = get_client(session, "ec2", region_name="ap-northeast-2")

    # 커스텀 설정
    ec2 = get_client(session, "ec2", max_attempts=10, connect_timeout=10)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal, cast

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from core.config import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_RETRY_MODE,
)
from core.exceptions import ConfigError

if TYPE_CHECKING:
    from core.config import AwareConfig

logger = logging.getLogger(__name__)

# Retry mode 타입 (botocore TypedDict와 호환)
RetryMode = Literal["legacy", "standard", "adaptive"]


def create_session(profile: str | None = None) -> boto3.Session:
    """boto3 Session 생성

    Args:
        profile: AWS 프로파일 이름 (None이면 기본 자격 증명 체인)

    Returns:
        boto3 Session

    Raises:
        ConfigError: 프로파일을 찾을 수 없는 경우
    """
    try:
        return boto3.Session(profile_name=profile) if profile else boto3.Session()
    except BotoCoreError as e:
        raise ConfigError("profile", f"세션 생성 실패 ({profile})", cause=e) from e


def get_client(
    session: boto3.Session,
    service_name: str,
    region_name: str | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    retry_mode: RetryMode = DEFAULT_RETRY_MODE,
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: int = DEFAULT_READ_TIMEOUT,
    **kwargs: Any,
) -> Any:
    """Retry가 적용된 boto3 client 생성

    Args:
        session: boto3 Session
        service_name: AWS 서비스 이름 (ec2, cloudformation)
        region_name: 리전 (None이면 세션 기본값)
        max_attempts: 최대 시도 횟수 (기본: 5)
        retry_mode: 재시도 모드 ('adaptive' 또는 'standard')
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 client
    """
    config = Config(
        retries={"max_attempts": max_attempts, "mode": retry_mode},  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
    )

    # 기존 config가 있으면 병합
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    # cast to Any to bypass boto3-stubs Literal type requirements
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region_name,
        config=config,
        **kwargs,
    )


def client_from_config(
    session: boto3.Session,
    service_name: str,
    region_name: str | None,
    config: AwareConfig,
) -> Any:
    """AwareConfig의 재시도/타임아웃 설정으로 client 생성"""
    logger.debug(f"{service_name} client 생성: region={region_name}, retry={config.retry_mode}/{config.max_attempts}")
    return get_client(
        session,
        service_name,
        region_name=region_name,
        max_attempts=config.max_attempts,
        retry_mode=cast(RetryMode, config.retry_mode),
        connect_timeout=config.connect_timeout,
        read_timeout=config.read_timeout,
    )
