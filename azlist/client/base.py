"""
azlist/client/base.py - 외부 협력자 인터페이스

코어(seed 쿼리, 크롤러, 확장 리소스, 오케스트레이터)가 사용하는
네트워크 기능을 Protocol로 정의합니다. 실제 구현은 Azure SDK 어댑터
(resource_graph.py, resources.py)이며, 테스트에서는 메모리 기반 fake로 대체합니다.

오류 규약:
- HTTP/전송 실패는 APICallError로 발생 (status_code 포함)
- 404는 is_not_found()로 판별
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass
class SeedPage:
    """ARG 쿼리 한 페이지

    Attributes:
        items: "id"를 포함한 리소스 문서 목록
        total_records: 전체 결과 수
        count: 이 페이지의 결과 수
        skip_token: 다음 페이지 연속 토큰
    """

    items: list[Any] = field(default_factory=list)
    total_records: int = 0
    count: int = 0
    skip_token: str | None = None


@dataclass
class ChildPage:
    """하위 리소스 목록 한 페이지

    Attributes:
        items: 리소스 문서 목록
        next_link: 다음 페이지 URL (없으면 마지막 페이지)
    """

    items: list[Any] = field(default_factory=list)
    next_link: str | None = None


class SeedQueryClient(Protocol):
    """ARG 조건 검색"""

    def query(
        self,
        query: str,
        subscriptions: list[str],
        top: int,
        skip: int | None = None,
        skip_token: str | None = None,
        authorization_scope_filter: str | None = None,
    ) -> SeedPage: ...


class ListingClient(Protocol):
    """부모 리소스 하위 타입별 목록 조회 + 리소스 그룹 조회"""

    def list_children(
        self,
        parent_id: str,
        type_path: str,
        api_version: str,
        next_link: str | None = None,
    ) -> ChildPage: ...

    def get_resource_group(self, name: str) -> dict[str, Any]: ...


class ListerClient(SeedQueryClient, ListingClient, Protocol):
    """Lister가 사용하는 전체 협력자 (AzureClient가 구현)"""
