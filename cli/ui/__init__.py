# cli/ui - TUI 컴포넌트 (rich)
"""
TUI 컴포넌트 모듈

CLI 전용 UI 컴포넌트들 (콘솔 출력, 진행 표시, 트리 렌더링)
"""

from .console import (
    SYMBOL_ERROR,
    SYMBOL_WARNING,
    console,
    err_console,
    get_console,
    get_logger,
    print_error,
    print_warning,
)
from .progress import StepTracker, step_progress
from .tree import print_trees, render_tree

__all__ = [
    # Console
    "console",
    "err_console",
    "get_console",
    "get_logger",
    "print_error",
    "print_warning",
    "SYMBOL_ERROR",
    "SYMBOL_WARNING",
    # Progress
    "StepTracker",
    "step_progress",
    # Tree
    "render_tree",
    "print_trees",
]
