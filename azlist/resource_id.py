"""
azlist/resource_id.py - ARM 리소스 ID 파싱

ARM 리소스 ID 문자열을 스코프 체인으로 파싱합니다.

지원 형식:
    /                                                   테넌트
    /subscriptions/{sub}                                구독
    /subscriptions/{sub}/resourceGroups/{rg}            리소스 그룹
    {scope}/providers/{ns}/{type}/{name}[/{type}/{name}...]
                                                        프로바이더 리소스
    {provider resource}/providers/{ns}/{type}/{name}    확장 리소스

동등성/해시는 정규 문자열의 대소문자를 무시하고 비교합니다.

Usage:
    from azlist.resource_id import parse_resource_id

    rid = parse_resource_id(
        "/subscriptions/xxx/resourceGroups/rg/providers/Microsoft.Network/virtualNetworks/vnet1"
    )
    rid.route_scope_string()  # "/Microsoft.Network/virtualNetworks"
    rid.root_scope()          # /subscriptions/xxx/resourceGroups/rg
"""

from __future__ import annotations

from enum import Enum


class ScopeKind(Enum):
    """리소스 ID 종류"""

    TENANT = "tenant"
    SUBSCRIPTION = "subscription"
    RESOURCE_GROUP = "resource_group"
    PROVIDER = "provider"


class ResourceId:
    """파싱된 ARM 리소스 ID

    Attributes:
        kind: 스코프 종류
        parent: 상위 스코프 (테넌트는 None)
        provider: 리소스 프로바이더 네임스페이스 (프로바이더 리소스만)
        types: 리소스 타입 세그먼트 (예: ("virtualNetworks", "subnets"))
        names: 리소스 이름 세그먼트 (types와 길이가 같음)
    """

    __slots__ = ("kind", "parent", "provider", "types", "names", "_str")

    def __init__(
        self,
        kind: ScopeKind,
        parent: ResourceId | None = None,
        provider: str = "",
        types: tuple[str, ...] = (),
        names: tuple[str, ...] = (),
    ):
        self.kind = kind
        self.parent = parent
        self.provider = provider
        self.types = types
        self.names = names
        self._str = self._build_string()

    # -------------------------------------------------------------------------
    # 표시 / 비교
    # -------------------------------------------------------------------------

    def _build_string(self) -> str:
        if self.kind == ScopeKind.TENANT:
            return "/"
        if self.kind == ScopeKind.SUBSCRIPTION:
            return f"/subscriptions/{self.names[0]}"
        if self.kind == ScopeKind.RESOURCE_GROUP:
            assert self.parent is not None
            return f"{self.parent}/resourceGroups/{self.names[0]}"

        assert self.parent is not None
        prefix = "" if self.parent.kind == ScopeKind.TENANT else str(self.parent)
        pairs = "/".join(f"{t}/{n}" for t, n in zip(self.types, self.names))
        return f"{prefix}/providers/{self.provider}/{pairs}"

    def __str__(self) -> str:
        return self._str

    def __repr__(self) -> str:
        return f"ResourceId({self._str!r})"

    @property
    def key(self) -> str:
        """중복 제거 키 (대문자 정규 문자열)"""
        return self._str.upper()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResourceId):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __lt__(self, other: ResourceId) -> bool:
        return self._str < other._str

    # -------------------------------------------------------------------------
    # 스코프
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        """마지막 이름 세그먼트 (테넌트는 빈 문자열)"""
        return self.names[-1] if self.names else ""

    @property
    def type_path(self) -> str:
        """전체 리소스 타입 (예: "Microsoft.Network/virtualNetworks/subnets")"""
        if self.kind == ScopeKind.PROVIDER:
            return "/".join((self.provider, *self.types))
        if self.kind == ScopeKind.RESOURCE_GROUP:
            return "Microsoft.Resources/resourceGroups"
        if self.kind == ScopeKind.SUBSCRIPTION:
            return "Microsoft.Resources/subscriptions"
        return "Microsoft.Resources/tenants"

    def route_scope_string(self) -> str:
        """스키마 계층 조회에 사용하는 라우팅 스코프 문자열"""
        if self.kind == ScopeKind.TENANT:
            return "/"
        if self.kind == ScopeKind.SUBSCRIPTION:
            return "/subscriptions"
        if self.kind == ScopeKind.RESOURCE_GROUP:
            return "/subscriptions/resourceGroups"

        assert self.parent is not None
        types = "/".join((self.provider, *self.types))
        if self.parent.kind == ScopeKind.PROVIDER:
            return f"{self.parent.route_scope_string()}/providers/{types}"
        return f"/{types}"

    def root_scope(self) -> ResourceId:
        """구독 또는 리소스 그룹 수준의 루트 스코프"""
        if self.kind != ScopeKind.PROVIDER:
            return self
        assert self.parent is not None
        return self.parent.root_scope()

    @property
    def is_resource_group(self) -> bool:
        return self.kind == ScopeKind.RESOURCE_GROUP


# =============================================================================
# 파싱
# =============================================================================


def parse_resource_id(raw: str) -> ResourceId:
    """ARM 리소스 ID 문자열 파싱

    Args:
        raw: 리소스 ID 문자열 (선행 "/" 필수)

    Returns:
        ResourceId

    Raises:
        ValueError: 형식이 잘못된 경우
    """
    if not isinstance(raw, str) or not raw.startswith("/"):
        raise ValueError(f"리소스 ID는 '/'로 시작해야 합니다: {raw!r}")

    tenant = ResourceId(ScopeKind.TENANT)
    if raw == "/":
        return tenant

    segs = raw[1:].split("/")
    if any(seg == "" for seg in segs):
        raise ValueError(f"빈 세그먼트가 포함된 리소스 ID: {raw!r}")

    scope = tenant
    i = 0

    # 기본 스코프: subscriptions/{id}[/resourceGroups/{name}]
    if segs[0].lower() == "subscriptions":
        if len(segs) < 2:
            raise ValueError(f"구독 ID가 없습니다: {raw!r}")
        scope = ResourceId(ScopeKind.SUBSCRIPTION, parent=tenant, names=(segs[1],))
        i = 2
        if i < len(segs) and segs[i].lower() == "resourcegroups":
            if i + 1 >= len(segs):
                raise ValueError(f"리소스 그룹 이름이 없습니다: {raw!r}")
            scope = ResourceId(ScopeKind.RESOURCE_GROUP, parent=scope, names=(segs[i + 1],))
            i += 2

    # 프로바이더 그룹: providers/{ns}/{type}/{name}[/{type}/{name}...]
    while i < len(segs):
        if segs[i].lower() != "providers":
            raise ValueError(f"예상하지 못한 세그먼트 {segs[i]!r}: {raw!r}")

        end = i + 1
        while end < len(segs) and segs[end].lower() != "providers":
            end += 1

        group = segs[i + 1 : end]
        if len(group) < 3 or (len(group) - 1) % 2 != 0:
            raise ValueError(f"프로바이더 세그먼트의 타입/이름 쌍이 맞지 않습니다: {raw!r}")

        provider, pairs = group[0], group[1:]
        scope = ResourceId(
            ScopeKind.PROVIDER,
            parent=scope,
            provider=provider,
            types=tuple(pairs[0::2]),
            names=tuple(pairs[1::2]),
        )
        i = end

    return scope
