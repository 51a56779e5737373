"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들
"""

import logging
import platform

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

# botocore 노이즈 로그 제한
logging.getLogger("botocore").setLevel(logging.WARNING)
logging.getLogger("boto3").setLevel(logging.WARNING)
logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)


def get_console(stderr: bool = False) -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다.

    Args:
        stderr: True면 표준 에러로 출력 (진행 표시/오류 메시지용)
    """
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=stderr,
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스 (트리 출력은 stdout, 진행/오류는 stderr)
console = get_console()
err_console = get_console(stderr=True)


def get_logger(name: str = "aware", level: int = logging.INFO) -> logging.Logger:
    """Rich 핸들러가 설정된 logger를 반환합니다.

    Args:
        name: logger 이름 (기본값: "aware")
        level: 로그 레벨

    Returns:
        logging.Logger: 설정된 logger 인스턴스
    """
    logger = logging.getLogger(name)

    # 이미 핸들러가 설정되어 있으면 레벨만 갱신
    if logger.handlers:
        logger.setLevel(level)
        return logger

    logger.setLevel(level)
    handler = RichHandler(console=err_console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    # 루트 logger(basicConfig)와 중복 출력 방지
    logger.propagate = False

    return logger


# =============================================================================
# 표준 출력 스타일
# =============================================================================

SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X, stderr)

    Args:
        message: 출력할 메시지
    """
    err_console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색, stderr)"""
    err_console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")
