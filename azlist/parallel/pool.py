"""
azlist/parallel/pool.py - 동시 실행 수 제한 작업 풀

ThreadPoolExecutor 기반의 범용 작업 풀입니다.
완료된 작업 결과는 wait()를 호출한 스레드 하나에서 완료 순서대로
collector 콜백에 전달되므로, collector가 갱신하는 누적 상태에는
별도의 동기화가 필요 없습니다.

특징:
- 최대 max_workers개 작업 동시 실행
- 직렬화된 결과 수집 (collector는 자기 자신과 동시에 실행되지 않음)
- wait()는 모든 작업 완료 후 첫 번째 작업 에러를 다시 발생
- 에러가 나도 실행 중인 다른 작업은 끝까지 실행됨 (암묵적 취소 없음)
- CancelToken이 취소되면 대기 중인 작업을 취소하고 즉시 반환

Example:
    found: list[Resource] = []

    pool = WorkPool(max_workers=10, collector=lambda r: found.extend(r.resources))
    for parent in parents:
        pool.add_task(lambda p=parent: list_children(p))
    pool.wait()
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from typing import Generic, TypeVar

from azlist.exceptions import OperationCancelledError, TaskPoolError

from .cancel import CancelToken

logger = logging.getLogger(__name__)

T = TypeVar("T")

# 취소 신호 확인 주기 (초)
CANCEL_POLL_INTERVAL = 0.1


def _clear_exception_chain(e: BaseException) -> None:
    """traceback + chained exception 메모리 누수 방지"""
    e.__traceback__ = None
    if e.__context__ is not None:
        e.__context__.__traceback__ = None
    if e.__cause__ is not None:
        e.__cause__.__traceback__ = None


class WorkPool(Generic[T]):
    """동시 실행 수 제한 작업 풀

    한 번 wait()한 풀은 재사용할 수 없습니다. 레벨마다 새 풀을 만드세요.
    """

    def __init__(
        self,
        max_workers: int,
        collector: Callable[[T], None],
        cancel: CancelToken | None = None,
        name: str = "pool",
    ):
        """초기화

        Args:
            max_workers: 최대 동시 실행 수 (1 이상)
            collector: 완료된 작업 결과를 받는 콜백 (직렬 실행)
            cancel: 취소 토큰 (선택사항)
            name: 로깅/스레드 이름용 풀 이름
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")

        self.max_workers = max_workers
        self.name = name
        self._collector = collector
        self._cancel = cancel
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=f"azlist-{name}")
        self._futures: list[Future[T]] = []
        self._closed = False

    @property
    def task_count(self) -> int:
        return len(self._futures)

    def add_task(self, func: Callable[[], T]) -> None:
        """작업 제출

        Args:
            func: 결과를 반환하거나 예외를 발생시키는 인자 없는 함수

        Raises:
            RuntimeError: 이미 wait()가 호출된 경우
        """
        if self._closed:
            raise RuntimeError(f"작업 풀 '{self.name}'은 이미 종료되었습니다")
        self._futures.append(self._executor.submit(func))

    def shutdown(self) -> None:
        """결과를 수집하지 않고 풀 종료

        아직 시작하지 않은 작업은 취소하고, 실행 중인 작업의 완료는 기다리지 않습니다.
        작업 제출 도중 예외가 발생해 wait()를 호출할 수 없을 때 사용합니다.
        """
        self._closed = True
        cancelled = sum(1 for future in self._futures if future.cancel())
        self._executor.shutdown(wait=False, cancel_futures=True)
        logger.debug(f"작업 풀 '{self.name}' 중단: {len(self._futures)}개 작업 중 {cancelled}개 취소")

    def wait(self) -> None:
        """모든 작업이 끝날 때까지 대기하며 결과를 수집

        Raises:
            OperationCancelledError: 취소 토큰이 취소된 경우
            TaskPoolError: collector가 예외를 발생시킨 경우
            Exception: 작업이 발생시킨 첫 번째 예외
        """
        self._closed = True
        start_time = time.monotonic()
        first_error: BaseException | None = None
        cancelled = False

        logger.debug(f"작업 풀 '{self.name}' 대기 시작: {len(self._futures)}개 작업, max_workers={self.max_workers}")

        pending: set[Future[T]] = set(self._futures)
        timeout = CANCEL_POLL_INTERVAL if self._cancel is not None else None

        try:
            while pending:
                if self._cancel is not None and self._cancel.cancelled:
                    cancelled = True
                    for future in pending:
                        future.cancel()
                    raise OperationCancelledError(f"작업 풀 '{self.name}' 취소됨 (미완료 {len(pending)}개)")

                done, pending = wait_futures(pending, timeout=timeout, return_when=FIRST_COMPLETED)
                for future in done:
                    error = future.exception()
                    if error is not None:
                        if first_error is None:
                            first_error = error
                        else:
                            _clear_exception_chain(error)
                        continue

                    try:
                        self._collector(future.result())
                    except Exception as e:
                        if first_error is None:
                            first_error = TaskPoolError(f"작업 풀 '{self.name}' 결과 수집 실패", cause=e)
        except KeyboardInterrupt:
            cancelled = True
            if self._cancel is not None:
                self._cancel.cancel()
            raise
        finally:
            self._executor.shutdown(wait=not cancelled, cancel_futures=cancelled)

        elapsed = (time.monotonic() - start_time) * 1000
        logger.debug(f"작업 풀 '{self.name}' 완료: {len(self._futures)}개 작업, 총 {elapsed:.0f}ms")

        if first_error is not None:
            raise first_error
