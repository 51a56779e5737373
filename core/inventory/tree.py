"""
core/inventory/tree.py - 출력용 트리 데이터 모델

수집 결과를 터미널 출력과 무관한 순수 트리(TreeNode)로 변환합니다.
렌더링은 cli.ui.tree가 담당합니다.

트리 종류:
    - VPC 트리: VPC -> 섹션(Subnets, Instances, ...) -> 리소스
    - 태그 트리: "Tags" -> 키 -> 값 -> 리소스 타입 -> 리소스 ID
    - 스택 트리: Stack -> 리소스
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Labeled, Stack, StackResource, TagDescription, Vpc

TAGS_ROOT = "Tags"


@dataclass
class TreeNode:
    """트리 노드

    Attributes:
        label: 노드 라벨
        children: 하위 노드 목록 (입력 순서 유지)
    """

    label: str
    children: list[TreeNode] = field(default_factory=list)

    def add(self, label: str) -> TreeNode:
        """하위 노드를 추가하고 반환"""
        child = TreeNode(label)
        self.children.append(child)
        return child

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def child(self, label: str) -> TreeNode | None:
        """라벨로 직계 하위 노드 조회"""
        for node in self.children:
            if node.label == label:
                return node
        return None

    def walk(self, depth: int = 0) -> Iterator[tuple[int, TreeNode]]:
        """(깊이, 노드)를 전위 순회로 반환"""
        yield depth, self
        for node in self.children:
            yield from node.walk(depth + 1)

    def to_lines(self) -> list[str]:
        """박스 문자 연결선을 사용한 일반 텍스트 렌더링

        Example:
            vpc-1 (main)
            ├── Subnets
            │   └── subnet-1
            └── Instances
                └── i-1
        """
        lines = [self.label]
        lines.extend(self._child_lines(""))
        return lines

    def _child_lines(self, prefix: str) -> Iterator[str]:
        for index, node in enumerate(self.children):
            last = index == len(self.children) - 1
            yield f"{prefix}{'└── ' if last else '├── '}{node.label}"
            yield from node._child_lines(prefix + ("    " if last else "│   "))


def build_vpc_tree(vpc: Vpc, sections: Iterable[tuple[str, Sequence[Labeled]]]) -> TreeNode:
    """VPC 트리 생성

    비어 있는 섹션은 생략합니다.

    Args:
        vpc: 루트 VPC
        sections: (섹션 제목, 리소스 목록) 순서쌍

    Returns:
        VPC 라벨을 루트로 하는 TreeNode
    """
    root = TreeNode(vpc.label())
    for title, resources in sections:
        if not resources:
            continue
        branch = root.add(title)
        for resource in resources:
            branch.add(resource.label())
    return root


def build_tag_tree(tag_descriptions: Iterable[TagDescription]) -> TreeNode:
    """태그 트리 생성

    키/값/리소스 타입은 정렬하고, 리소스 ID는 API 순서를 유지합니다.

    Args:
        tag_descriptions: describe_tags 결과

    Returns:
        "Tags"를 루트로 하는 TreeNode
    """
    grouped: dict[str, dict[str, dict[str, list[str]]]] = {}
    for tag in tag_descriptions:
        (
            grouped.setdefault(tag.key, {})
            .setdefault(tag.value, {})
            .setdefault(tag.resource_type, [])
            .append(tag.resource_id)
        )

    root = TreeNode(TAGS_ROOT)
    for key in sorted(grouped):
        key_node = root.add(key)
        for value in sorted(grouped[key]):
            value_node = key_node.add(value)
            for resource_type in sorted(grouped[key][value]):
                type_node = value_node.add(resource_type)
                for resource_id in grouped[key][value][resource_type]:
                    type_node.add(resource_id)
    return root


def build_stack_tree(stack: Stack, resources: Iterable[StackResource]) -> TreeNode:
    """스택 트리 생성

    Args:
        stack: CloudFormation Stack
        resources: Stack 리소스 목록

    Returns:
        스택 제목을 루트로 하는 TreeNode
    """
    root = TreeNode(stack.title())
    for resource in resources:
        root.add(resource.label())
    return root
