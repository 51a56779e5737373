"""
cli/ui/progress.py - 단계별 수집 진행 표시

리전 하나의 수집 과정(VPC 수집 -> 12종 리소스 -> 태그, 또는 Stack별 리소스)을
Rich Progress 한 줄로 표시합니다.

Components:
- StepTracker: 이름 있는 단계 순서를 추적하는 트래커

Context managers:
- step_progress: 다단계 수집용

Example:
    from cli.ui.progress import step_progress

    with step_progress("AWS Region ap-northeast-2", total_steps=13) as steps:
        steps.step("Collecting VPCs")
        inventory.collect_vpcs()
        steps.complete_step()

        inventory.collect(progress=steps.as_callback())
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

if TYPE_CHECKING:
    from rich.console import Console

from .console import err_console as default_console


class StepTracker:
    """단계 기반 진행 트래커

    Display format:
        [spinner] AWS Region ap-northeast-2: (3/13) Internet Gateways [progress bar] 3/13 00:02
    """

    def __init__(self, progress: Progress, task_id: TaskID, description: str, total_steps: int) -> None:
        self._progress = progress
        self._task_id = task_id
        self._description = description
        self._total_steps = total_steps
        self._current_step = 0
        self._completed = 0
        self._progress.update(task_id, total=total_steps)

    @property
    def progress(self) -> Progress:
        """하위 Rich Progress 객체"""
        return self._progress

    @property
    def task_id(self) -> TaskID:
        return self._task_id

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def completed(self) -> int:
        return self._completed

    @property
    def total_steps(self) -> int:
        return self._total_steps

    def set_total(self, total_steps: int) -> None:
        """전체 단계 수 변경 (Stack 수를 알게 된 뒤 등)"""
        self._total_steps = total_steps
        self._progress.update(self._task_id, total=total_steps)

    def step(self, description: str) -> None:
        """다음 단계로 이동

        Args:
            description: 현재 단계 설명
        """
        self._current_step += 1
        step_desc = f"[cyan]{self._description}: ({self._current_step}/{self._total_steps}) {description}"
        self._progress.update(self._task_id, description=step_desc, completed=self._completed)

    def complete_step(self) -> None:
        """현재 단계 완료 처리"""
        self._completed = self._current_step
        self._progress.update(self._task_id, completed=self._completed)

    def as_callback(self) -> Callable[[str, bool], None]:
        """(message, done) 콜백으로 변환

        done=False이면 다음 단계 시작, done=True이면 현재 단계 완료.

        Example:
            with step_progress("AWS Region us-east-1", 13) as steps:
                inventory.collect(progress=steps.as_callback())
        """

        def status_callback(message: str = "", done: bool = False) -> None:
            if done:
                self.complete_step()
            elif message:
                self.step(message)

        return status_callback


@contextmanager
def step_progress(
    description: str,
    total_steps: int,
    console: Console | None = None,
    disable: bool = False,
) -> Generator[StepTracker, None, None]:
    """단계 기반 진행 표시 컨텍스트 매니저

    Args:
        description: 전체 작업 설명 (예: "AWS Region us-east-1")
        total_steps: 전체 단계 수
        console: 사용할 Rich Console (기본: stderr 콘솔)
        disable: True면 화면에 표시하지 않음 (quiet 모드)

    Yields:
        StepTracker
    """
    cons = console or default_console

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(bar_width=40),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=cons,
        expand=False,
        transient=False,
        disable=disable,
    )

    with progress:
        task_id = progress.add_task(f"[cyan]{description}", total=total_steps)
        tracker = StepTracker(progress, task_id, description, total_steps)

        yield tracker

        # 정상 종료 시에만 완료 표시
        progress.update(task_id, description=f"[green]{description}", completed=tracker.total_steps)
