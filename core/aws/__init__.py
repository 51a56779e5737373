"""
core/aws - boto3 세션/클라이언트 생성

Example:
    from core.aws import create_session, get_client

    session = create_session("my-profile")
    ec2 = get_client(session, "ec2", region_name="ap-northeast-2")
"""

from .client import client_from_config, create_session, get_client

__all__: list[str] = [
    "create_session",
    "get_client",
    "client_from_config",
]
