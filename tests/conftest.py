"""
tests/conftest.py - pytest 공통 픽스처

Azure API를 대체하는 메모리 기반 FakeAzureClient와 스키마 픽스처를 제공합니다.

Usage:
    def test_something(fake_client, schema_tree):
        fake_client.add_seed(make_doc(VNET_ID))
        fake_client.add_children(VNET_ID, "subnets", [make_doc(SUBNET_ID)])
        lister = Lister(ListOptions(subscription_id=SUB_ID, parallelism=2), fake_client, schema_tree)
"""

import sys
import threading
from pathlib import Path
from typing import Any

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from azlist.client.base import ChildPage, SeedPage  # noqa: E402
from azlist.exceptions import APICallError  # noqa: E402
from azlist.schema import build_schema_tree  # noqa: E402

# =============================================================================
# 테스트 데이터
# =============================================================================

SUB_ID = "00000000-0000-0000-0000-000000000000"
RG_ID = f"/subscriptions/{SUB_ID}/resourceGroups/rg1"
VNET_ID = f"{RG_ID}/providers/Microsoft.Network/virtualNetworks/vnet1"
SUBNET_ID = f"{VNET_ID}/subnets/sn1"
SQL_ID = f"{RG_ID}/providers/Microsoft.Sql/servers/sql1"
DB_ID = f"{SQL_ID}/databases/db1"

SCHEMA_SNAPSHOT: dict[str, list[str]] = {
    "Microsoft.Network/virtualNetworks": ["2023-04-01", "2023-09-01"],
    "Microsoft.Network/virtualNetworks/subnets": ["2023-04-01", "2023-09-01"],
    "Microsoft.Network/virtualNetworks/virtualNetworkPeerings": ["2023-09-01"],
    "Microsoft.Sql/servers": ["2021-11-01"],
    "Microsoft.Sql/servers/databases": ["2021-11-01"],
    "Microsoft.Sql/servers/databases/backupShortTermRetentionPolicies": ["2021-11-01"],
    "Microsoft.Authorization/roleAssignments": ["2020-04-01-preview", "2022-04-01"],
}


def make_doc(resource_id: str, **extra: Any) -> dict[str, Any]:
    """리소스 문서 생성 (id + name + 추가 필드)"""
    doc: dict[str, Any] = {"id": resource_id, "name": resource_id.rsplit("/", 1)[-1]}
    doc.update(extra)
    return doc


# =============================================================================
# Fake Azure 클라이언트
# =============================================================================


class FakeAzureClient:
    """SeedQueryClient + ListingClient 메모리 구현

    - 등록되지 않은 하위 리소스 엔드포인트는 404를 반환
    - fail()로 엔드포인트별 HTTP 실패 지정
    - add_children()에 여러 페이지를 넘기면 nextLink로 페이지 처리
    """

    def __init__(self) -> None:
        self.seed_pages: list[SeedPage] = []
        self.children: dict[str, list[list[Any]]] = {}
        self.failures: dict[str, int] = {}
        self.resource_groups: dict[str, dict[str, Any]] = {}

        self.queries: list[dict[str, Any]] = []
        self.list_calls: list[tuple[str, str, str | None]] = []
        self.rg_calls: list[str] = []
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # 설정
    # -------------------------------------------------------------------------

    def add_seed(self, *docs: dict[str, Any]) -> None:
        """seed 결과를 한 페이지로 설정"""
        self.seed_pages = [SeedPage(items=list(docs), total_records=len(docs), count=len(docs))]

    def add_children(self, parent_id: str, type_path: str, *pages: list[Any]) -> None:
        self.children[f"{parent_id}/{type_path}".upper()] = [list(p) for p in pages]

    def fail(self, parent_id: str, type_path: str, status_code: int) -> None:
        self.failures[f"{parent_id}/{type_path}".upper()] = status_code

    def add_resource_group(self, name: str, **extra: Any) -> None:
        rg_id = f"/subscriptions/{SUB_ID}/resourceGroups/{name}"
        self.resource_groups[name.upper()] = make_doc(rg_id, location="koreacentral", **extra)

    # -------------------------------------------------------------------------
    # SeedQueryClient
    # -------------------------------------------------------------------------

    def query(
        self,
        query: str,
        subscriptions: list[str],
        top: int,
        skip: int | None = None,
        skip_token: str | None = None,
        authorization_scope_filter: str | None = None,
    ) -> SeedPage:
        self.queries.append(
            {
                "query": query,
                "subscriptions": subscriptions,
                "top": top,
                "skip": skip,
                "skip_token": skip_token,
                "authorization_scope_filter": authorization_scope_filter,
            }
        )
        index = len(self.queries) - 1
        if index < len(self.seed_pages):
            return self.seed_pages[index]
        return SeedPage()

    # -------------------------------------------------------------------------
    # ListingClient
    # -------------------------------------------------------------------------

    def list_children(
        self,
        parent_id: str,
        type_path: str,
        api_version: str,
        next_link: str | None = None,
    ) -> ChildPage:
        key = f"{parent_id}/{type_path}".upper()
        with self._lock:
            self.list_calls.append((key, api_version, next_link))

        operation = f"GET {parent_id}/{type_path}"
        if key in self.failures:
            status = self.failures[key]
            raise APICallError(operation, status_code=status, error_code="Failed", error_message="boom")

        pages = self.children.get(key)
        if pages is None:
            raise APICallError(operation, status_code=404, error_code="NotFound", error_message="not found")

        index = int(next_link.rsplit("#", 1)[1]) if next_link else 0
        link = f"fake://{key}#{index + 1}" if index + 1 < len(pages) else None
        return ChildPage(items=pages[index], next_link=link)

    def get_resource_group(self, name: str) -> dict[str, Any]:
        self.rg_calls.append(name)
        group = self.resource_groups.get(name.upper())
        if group is None:
            raise APICallError(f"ResourceGroups.get({name})", status_code=404, error_code="ResourceGroupNotFound")
        return group


# =============================================================================
# 픽스처
# =============================================================================


@pytest.fixture
def fake_client() -> FakeAzureClient:
    """메모리 기반 Azure 클라이언트"""
    return FakeAzureClient()


@pytest.fixture
def schema_snapshot() -> dict[str, list[str]]:
    """테스트용 ARM 스키마 스냅샷 (복사본)"""
    return {k: list(v) for k, v in SCHEMA_SNAPSHOT.items()}


@pytest.fixture
def schema_tree(schema_snapshot):
    """테스트용 ARM 스키마 트리"""
    return build_schema_tree(schema_snapshot)
