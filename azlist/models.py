"""
azlist/models.py - 리소스 조회 결과 모델

주요 구성 요소:
- Resource: 리소스 ID + 속성 문서 (불변)
- ListError: 엔드포인트 단위 목록 조회 실패 기록 (예외 아님)
- ListResult: 리소스 목록 + 에러 목록
- ResourceSet / ErrorSet: 대문자 키 기반 중복 제거 집합 (먼저 들어온 값 유지)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from azlist.resource_id import ResourceId, parse_resource_id
from azlist.types.document import JSONValue, document_id, is_document


@dataclass(frozen=True)
class Resource:
    """Azure 리소스

    Attributes:
        id: 파싱된 리소스 ID
        properties: 응답 본문 전체 (읽기 전용 매핑)
    """

    id: ResourceId
    properties: Mapping[str, JSONValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.properties, MappingProxyType):
            object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @property
    def key(self) -> str:
        return self.id.key

    @classmethod
    def from_document(cls, doc: Any) -> Resource:
        """응답 항목을 Resource로 변환

        Raises:
            ValueError: 객체가 아니거나 "id"가 없거나 문자열이 아니거나 파싱 불가한 경우
        """
        if not is_document(doc):
            raise ValueError(f"리소스 본문이 JSON 객체가 아닙니다: {doc!r}")
        if "id" not in doc:
            raise ValueError(f"응답에 리소스 ID가 없습니다: {doc!r}")
        raw_id = document_id(doc)
        if raw_id is None:
            raise ValueError(f"리소스 ID가 문자열이 아닙니다: {doc!r}")
        try:
            rid = parse_resource_id(raw_id)
        except ValueError as e:
            raise ValueError(f"리소스 ID 파싱 실패 {raw_id}: {e}") from e
        return cls(id=rid, properties=doc)

    def to_dict(self, with_body: bool = True) -> dict[str, Any]:
        """직렬화용 딕셔너리"""
        out: dict[str, Any] = {"id": str(self.id)}
        if with_body:
            out["properties"] = dict(self.properties)
        return out


@dataclass(frozen=True)
class ListError:
    """엔드포인트 단위 목록 조회 실패

    Attributes:
        endpoint: 대문자 "<부모 ID>/<하위 타입>"
        api_version: 사용한 API 버전
        message: 에러 메시지
    """

    endpoint: str
    api_version: str
    message: str

    def __str__(self) -> str:
        return f"listing {self.endpoint} (api-version={self.api_version}): {self.message}"

    @property
    def key(self) -> str:
        return self.endpoint.upper()

    def to_dict(self) -> dict[str, str]:
        return {"endpoint": self.endpoint, "apiVersion": self.api_version, "message": self.message}


def make_endpoint(parent_id: ResourceId | str, child_type: str) -> str:
    """ListError 엔드포인트 키 생성"""
    return f"{parent_id}/{child_type}".upper()


@dataclass
class ListResult:
    """조회 결과"""

    resources: list[Resource] = field(default_factory=list)
    errors: list[ListError] = field(default_factory=list)

    def to_dict(self, with_body: bool = True) -> dict[str, Any]:
        return {
            "resources": [r.to_dict(with_body=with_body) for r in self.resources],
            "errors": [e.to_dict() for e in self.errors],
        }


# =============================================================================
# 중복 제거 집합
# =============================================================================


class ResourceSet:
    """리소스 ID(대문자) 기준 중복 제거 집합. 먼저 추가된 값이 유지됩니다."""

    def __init__(self, resources: Iterable[Resource] = ()):
        self._items: dict[str, Resource] = {}
        for res in resources:
            self.add(res)

    def add(self, res: Resource) -> bool:
        """새로 추가되었으면 True"""
        if res.key in self._items:
            return False
        self._items[res.key] = res
        return True

    def __contains__(self, res: object) -> bool:
        return isinstance(res, Resource) and res.key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._items.values())

    def sorted(self) -> list[Resource]:
        return sort_resources(self._items.values())


class ErrorSet:
    """엔드포인트(대문자) 기준 중복 제거 집합. 먼저 추가된 값이 유지됩니다."""

    def __init__(self, errors: Iterable[ListError] = ()):
        self._items: dict[str, ListError] = {}
        self.extend(errors)

    def add(self, err: ListError) -> bool:
        if err.key in self._items:
            return False
        self._items[err.key] = err
        return True

    def extend(self, errors: Iterable[ListError]) -> None:
        for err in errors:
            self.add(err)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ListError]:
        return iter(self._items.values())

    def sorted(self) -> list[ListError]:
        return sort_errors(self._items.values())


def sort_resources(resources: Iterable[Resource]) -> list[Resource]:
    return sorted(resources, key=lambda r: str(r.id))


def sort_errors(errors: Iterable[ListError]) -> list[ListError]:
    return sorted(errors, key=lambda e: e.endpoint)
