"""
cli/output.py - 조회 결과 출력 포맷

text:
    Listing errors:            (--print-error이고 에러가 있을 때만)
    \t<에러>
    <빈 줄>
    <리소스 ID>
    <본문 JSON>                (--with-body)

json:
    {"resources": [{"id", "properties"}], "errors": [{"endpoint", "apiVersion", "message"}]}
"""

import json

from azlist.models import ListResult
from azlist.types.document import to_pretty_json


def render_text(result: ListResult, with_body: bool = False, print_error: bool = False) -> str:
    """텍스트 형식 출력 문자열"""
    lines: list[str] = []

    if print_error and result.errors:
        lines.append("Listing errors:")
        lines.extend(f"\t{err}" for err in result.errors)
        lines.append("")

    for res in result.resources:
        lines.append(str(res.id))
        if with_body:
            lines.append(to_pretty_json(res.properties))

    return "\n".join(lines)


def render_json(result: ListResult, with_body: bool = False, print_error: bool = False) -> str:
    """JSON 형식 출력 문자열 (properties는 with_body, errors는 print_error일 때만)"""
    data = result.to_dict(with_body=with_body)
    if not print_error:
        data["errors"] = []
    return json.dumps(data, ensure_ascii=False, indent=2, default=str)


RENDERERS = {
    "text": render_text,
    "json": render_json,
}
