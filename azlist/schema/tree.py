"""
azlist/schema/tree.py - ARM 스키마 계층 트리

"리소스 타입 경로 -> API 버전 목록" 형태의 평탄한 스냅샷을
탐색 가능한 계층 트리로 변환합니다.

트리는 대문자 전체 타입 경로를 키로 모든 엔트리를 담고,
각 엔트리의 children은 대문자 마지막 세그먼트를 키로 하위 엔트리를 가리킵니다.
(같은 엔트리 객체가 최상위 키와 부모의 children 양쪽에서 참조됨)

Example:
    tree = build_schema_tree({
        "Microsoft.Network/virtualNetworks": ["2023-04-01", "2023-09-01"],
        "Microsoft.Network/virtualNetworks/subnets": ["2023-04-01", "2023-09-01"],
    })
    vnet = tree["MICROSOFT.NETWORK/VIRTUALNETWORKS"]
    vnet.children["SUBNETS"] is tree["MICROSOFT.NETWORK/VIRTUALNETWORKS/SUBNETS"]  # True
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from azlist.exceptions import SchemaError

logger = logging.getLogger(__name__)

SchemaTree = dict[str, "SchemaEntry"]


@dataclass(eq=False)
class SchemaEntry:
    """스키마 트리 노드

    Attributes:
        versions: API 버전 목록 (마지막 원소를 최신으로 간주, 의미적 비교 없음)
        children: 대문자 하위 타입 세그먼트 -> 하위 엔트리
    """

    versions: tuple[str, ...]
    children: SchemaTree = field(default_factory=dict)

    @property
    def latest_version(self) -> str:
        """최신 API 버전 (스냅샷이 미리 정렬되어 있다고 가정)"""
        if not self.versions:
            raise SchemaError("API 버전 목록이 비어 있습니다")
        return self.versions[-1]


def normalize_type(resource_type: str) -> str:
    """트리 조회 키로 정규화 (대문자, 선행 "/" 제거)"""
    return resource_type.lstrip("/").upper()


def _merge_trailing_slash_types(schemas: dict[str, list[str]]) -> None:
    """후행 "/"가 붙은 레거시 타입 키를 정규 키로 병합

    예: "Microsoft.Network/publicIPAddresses/" -> "Microsoft.Network/publicIPAddresses"
    """
    for rt in [rt for rt in schemas if rt.endswith("/")]:
        correct = rt.rstrip("/")
        versions = schemas.pop(rt)
        if correct in schemas:
            schemas[correct] = sorted(set(schemas[correct]) | set(versions))
        else:
            schemas[correct] = list(versions)


def build_schema_tree(snapshot: Mapping[str, list[str]]) -> SchemaTree:
    """평탄한 스냅샷으로 스키마 트리 구성

    세그먼트 수 2부터 한 레벨씩 처리합니다. 각 레벨은 독립된 배치이므로
    입력 순서와 무관하게 결과가 결정적입니다. 부모 타입이 스냅샷에 없으면
    링크 없이 최상위 키로만 존재합니다.

    Args:
        snapshot: 리소스 타입 경로 -> 정렬된 API 버전 목록

    Returns:
        대문자 전체 타입 경로 -> SchemaEntry

    Raises:
        SchemaError: 세그먼트가 2개 미만이거나 API 버전 목록이 빈 타입 경로가 있는 경우
    """
    remaining = {rt: list(versions) for rt, versions in snapshot.items()}
    _merge_trailing_slash_types(remaining)

    # 프로바이더 + 하나 이상의 타입 세그먼트, 비어 있지 않은 버전 목록 필수
    for rt, versions in remaining.items():
        if len(rt.split("/")) < 2:
            raise SchemaError(f"잘못된 리소스 타입: {rt}", resource_type=rt)
        if not versions:
            raise SchemaError(f"API 버전 목록이 비어 있습니다: {rt}", resource_type=rt)

    tree: SchemaTree = {}
    level = 2

    while remaining:
        used: list[str] = []
        for rt, versions in remaining.items():
            # 스냅샷의 부모/자식 타입 간 대소문자가 일관되지 않음
            segs = rt.upper().split("/")
            if len(segs) != level:
                continue
            used.append(rt)

            entry = SchemaEntry(versions=tuple(versions))
            tree["/".join(segs)] = entry

            parent = tree.get("/".join(segs[: level - 1]))
            if parent is not None:
                parent.children[segs[level - 1]] = entry

        for rt in used:
            del remaining[rt]
        level += 1

    logger.debug(f"스키마 트리 구성 완료: {len(tree)}개 타입, 최대 깊이 {level - 1}")
    return tree


def lookup_children(tree: SchemaTree, route_scope: str) -> SchemaTree:
    """라우팅 스코프의 선언된 하위 타입 (없으면 빈 트리)"""
    entry = tree.get(normalize_type(route_scope))
    if entry is None:
        return {}
    return entry.children
