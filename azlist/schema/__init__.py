"""
azlist/schema - ARM 스키마 스냅샷과 리소스 타입 계층 트리

Example:
    from azlist.schema import load_schema_tree

    tree = load_schema_tree()  # 내장 스냅샷
    entry = tree["MICROSOFT.NETWORK/VIRTUALNETWORKS"]
    entry.children.keys()      # {"SUBNETS", "VIRTUALNETWORKPEERINGS", ...}
"""

from .loader import load_schema_snapshot, load_schema_tree
from .tree import SchemaEntry, SchemaTree, build_schema_tree, lookup_children, normalize_type

__all__: list[str] = [
    "SchemaEntry",
    "SchemaTree",
    "build_schema_tree",
    "lookup_children",
    "normalize_type",
    "load_schema_snapshot",
    "load_schema_tree",
]
