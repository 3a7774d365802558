"""
azlist/types/document.py - 리소스 속성 문서 타입

네트워크 계층이 반환하는 임의 중첩 JSON 문서를 JSON 변형(variant)의
재귀 타입 별칭으로 표현하고, 코어가 읽는 몇 가지 필드
("id", "managedBy", "properties.scope")에 대한 좁은 접근 헬퍼를 제공합니다.

Usage:
    from azlist.types.document import managed_by, document_id

    if managed_by(doc):
        ...  # 다른 리소스가 수명 주기를 관리함
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TypeAlias, Union

# JSON 값: null | bool | number | string | array | object
JSONScalar: TypeAlias = Union[None, bool, int, float, str]
JSONValue: TypeAlias = Union[JSONScalar, list["JSONValue"], dict[str, "JSONValue"]]
Document: TypeAlias = Mapping[str, JSONValue]


def is_document(value: object) -> bool:
    """JSON 객체(문자열 키 매핑)인지 확인"""
    return isinstance(value, Mapping) and all(isinstance(k, str) for k in value)


def get_str(doc: Document, key: str) -> str | None:
    """문서의 최상위 문자열 필드 (문자열이 아니면 None)"""
    value = doc.get(key)
    return value if isinstance(value, str) else None


def get_path_str(doc: Document, *path: str) -> str | None:
    """중첩 경로의 문자열 필드

    Example:
        get_path_str(doc, "properties", "scope")
    """
    current: JSONValue = dict(doc)
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current if isinstance(current, str) else None


def document_id(doc: Document) -> str | None:
    """"id" 필드"""
    return get_str(doc, "id")


def managed_by(doc: Document) -> str:
    """"managedBy" 필드 (없거나 문자열이 아니면 빈 문자열)"""
    return get_str(doc, "managedBy") or ""


def scope_of(doc: Document) -> str | None:
    """"properties.scope" 필드 (역할 할당 등 확장 리소스의 적용 범위)"""
    return get_path_str(doc, "properties", "scope")


def to_pretty_json(doc: Document) -> str:
    """들여쓰기 2칸의 JSON 문자열"""
    return json.dumps(dict(doc), indent=2, ensure_ascii=False, default=str)
