"""
cli/ui/tree.py - TreeNode 터미널 렌더링

core.inventory.tree.TreeNode를 rich.tree.Tree로 변환해 출력합니다.
--plain 옵션이면 박스 문자 연결선의 일반 텍스트로 출력합니다.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.tree import Tree

from .console import console as default_console

if TYPE_CHECKING:
    from rich.console import Console

    from core.inventory.tree import TreeNode


def render_tree(node: TreeNode) -> Tree:
    """TreeNode -> rich Tree

    루트는 굵게, 리소스가 아닌 중간 노드(섹션)는 cyan으로 표시합니다.
    """
    tree = Tree(f"[bold]{escape(node.label)}[/bold]")
    _add_children(tree, node)
    return tree


def _add_children(branch: Tree, node: TreeNode) -> None:
    for child in node.children:
        label = escape(child.label)
        if child.is_leaf:
            sub = branch.add(label)
        else:
            sub = branch.add(f"[cyan]{label}[/cyan]")
        _add_children(sub, child)


def print_trees(trees: Iterable[TreeNode], plain: bool = False, console: Console | None = None) -> int:
    """트리 목록 출력 (트리마다 앞에 빈 줄)

    Args:
        trees: 출력할 TreeNode 목록
        plain: True면 Rich 스타일 없이 일반 텍스트로 출력
        console: 출력 콘솔 (기본: stdout 콘솔)

    Returns:
        출력한 트리 개수
    """
    cons = console or default_console
    count = 0
    for node in trees:
        cons.print()
        if plain:
            for line in node.to_lines():
                cons.print(line, markup=False, highlight=False, emoji=False)
        else:
            cons.print(render_tree(node))
        count += 1
    return count
