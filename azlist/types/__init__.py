"""
azlist/types - 공통 타입 정의
"""

from .document import (
    Document,
    JSONScalar,
    JSONValue,
    document_id,
    get_path_str,
    get_str,
    is_document,
    managed_by,
    scope_of,
    to_pretty_json,
)

__all__: list[str] = [
    "JSONScalar",
    "JSONValue",
    "Document",
    "is_document",
    "get_str",
    "get_path_str",
    "document_id",
    "managed_by",
    "scope_of",
    "to_pretty_json",
]
