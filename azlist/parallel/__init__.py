"""
azlist/parallel - 병렬 처리 모듈

하위 리소스 목록 조회를 동시 실행 수 제한 하에 병렬로 처리합니다.

주요 구성 요소:
- WorkPool: 직렬화된 결과 수집기를 가진 고정 병렬 작업 풀
- CancelToken: 모든 외부 호출에 전달되는 취소 신호

Example:
    from azlist.parallel import CancelToken, WorkPool

    token = CancelToken()
    results = []
    pool = WorkPool(max_workers=10, collector=results.append, cancel=token)
    for item in items:
        pool.add_task(lambda i=item: fetch(i, token))
    pool.wait()
"""

from .cancel import CancelToken, check_cancelled
from .pool import WorkPool

__all__: list[str] = [
    "WorkPool",
    "CancelToken",
    "check_cancelled",
]
