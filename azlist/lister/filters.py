"""
azlist/lister/filters.py - 확장 리소스 내장 필터

특정 확장 리소스 타입은 부모 기준으로 후보를 걸러야 의미가 있습니다.

- Microsoft.Authorization/roleAssignments:
    부모 리소스 id와 properties.scope가 같은(대소문자 무시) 역할 할당만 유지
"""

from __future__ import annotations

from azlist.types.document import Document, document_id, scope_of

from .extension import ExtensionResource
from .listing import ResourceFilter

ROLE_ASSIGNMENT_TYPE = "Microsoft.Authorization/roleAssignments"


def role_assignment_scope_filter(parent: Document, candidate: Document) -> bool:
    """역할 할당의 scope가 부모 리소스 id와 같은지 확인"""
    parent_id = document_id(parent)
    if parent_id is None:
        return False
    scope = scope_of(candidate)
    if scope is None:
        return False
    return parent_id.lower() == scope.lower()


# 대문자 타입 -> 필터
BUILTIN_FILTERS: dict[str, ResourceFilter] = {
    ROLE_ASSIGNMENT_TYPE.upper(): role_assignment_scope_filter,
}


def extension_from_type(resource_type: str) -> ExtensionResource:
    """타입 문자열로 ExtensionResource 생성 (내장 필터가 있으면 부착)"""
    return ExtensionResource(type=resource_type, filter=BUILTIN_FILTERS.get(resource_type.upper()))
