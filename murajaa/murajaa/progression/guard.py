"""
In-process guard against applying one task completion twice.

Two completion signals for the same task can arrive concurrently (a review
approved twice, a retried request). The guard serialises signals per task
key and remembers which keys were applied, so at most one transition
happens per task.
"""

import threading
from collections.abc import Hashable

from murajaa._logging import log_stale_completion
from murajaa.models import AdvanceResult, LearnerPosition, StageCompletion
from murajaa.progression.stages import advance


class TaskAdvanceGuard:
    """
    Per-task lock plus an "already applied" record around ``advance``.

    A key's lock is released as soon as the key is applied; later signals
    for it are answered from the applied record alone. Applied keys are kept
    until ``forget`` is called, so callers that own the task lifecycle
    should forget a key once its task is archived.

    Example:
        guard = TaskAdvanceGuard()
        result = guard.apply(task_id, position, task.completion, total_lines=15)
        ...
        guard.forget(task_id)
    """

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}
        self._applied: set[Hashable] = set()

    @property
    def lock_count(self) -> int:
        """Number of keys currently holding a lock."""
        with self._registry_lock:
            return len(self._locks)

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def _mark_applied(self, key: Hashable) -> None:
        with self._registry_lock:
            self._applied.add(key)
            self._locks.pop(key, None)

    def was_applied(self, key: Hashable) -> bool:
        """Whether a completion for ``key`` has been applied."""
        with self._registry_lock:
            return key in self._applied

    def apply(
        self,
        key: Hashable,
        position: LearnerPosition,
        completion: StageCompletion,
        total_lines: int,
        is_last_page: bool = False,
    ) -> AdvanceResult:
        """
        Advance at most once for ``key``.

        A repeated signal for an applied key is rejected with the position
        unchanged. Rejected signals do not mark the key as applied.
        """
        if self.was_applied(key):
            return self._already_applied(key, position)

        with self._lock_for(key):
            if self.was_applied(key):
                return self._already_applied(key, position)

            result = advance(position, completion, total_lines, is_last_page)
            if result.advanced or result.finished:
                self._mark_applied(key)
            return result

    def _already_applied(self, key: Hashable, position: LearnerPosition) -> AdvanceResult:
        reason = "completion already applied"
        log_stale_completion(reason, task=key)
        return AdvanceResult(position=position, advanced=False, reason=reason)

    def forget(self, key: Hashable) -> None:
        """
        Drop the record and lock for ``key``.

        A later completion for the same key is applied again, so only forget
        keys whose task can no longer produce signals.
        """
        with self._registry_lock:
            self._applied.discard(key)
            self._locks.pop(key, None)
