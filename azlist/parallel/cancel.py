"""
azlist/parallel/cancel.py - 취소 토큰

모든 외부 호출과 작업 풀 대기에 전달되는 협조적 취소 신호입니다.
타임아웃 정책은 호출자가 cancel()을 호출하는 방식으로 결정합니다.

Example:
    token = CancelToken()
    timer = threading.Timer(300, token.cancel)
    timer.start()

    result = lister.list(predicate, cancel=token)
"""

from __future__ import annotations

import threading

from azlist.exceptions import OperationCancelledError


class CancelToken:
    """threading.Event 기반 취소 신호"""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """취소 요청 (여러 번 호출해도 안전)"""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """취소되었으면 OperationCancelledError 발생"""
        if self._event.is_set():
            raise OperationCancelledError()

    def wait(self, timeout: float | None = None) -> bool:
        """취소될 때까지 대기 (취소되었으면 True)"""
        return self._event.wait(timeout)


def check_cancelled(token: CancelToken | None) -> None:
    """토큰이 있고 취소되었으면 OperationCancelledError 발생"""
    if token is not None:
        token.raise_if_cancelled()
