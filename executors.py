"""Worker-pool backends for the parallel search: process pool or thread pool."""

from __future__ import annotations

import concurrent.futures
import multiprocessing
import os
from dataclasses import dataclass
from typing import Optional

BACKENDS = ("process", "thread")
DEFAULT_BACKEND = "process"
WORKERS_ENV = "FLEW_WORKERS"


class ExecutorNotAvailable(RuntimeError):
    """Raised when the requested pool cannot be created in this environment."""


@dataclass
class ExecutorHandle:
    executor: concurrent.futures.Executor
    backend: str
    workers: int

    @property
    def shares_memory(self) -> bool:
        """Thread workers can append to the parent's collector directly."""
        return self.backend == "thread"


def resolve_workers(workers: Optional[int] = None) -> int:
    """Explicit count, else $FLEW_WORKERS, else one per CPU."""
    if workers is None:
        raw = os.environ.get(WORKERS_ENV, "").strip()
        if raw:
            try:
                workers = int(raw)
            except ValueError as exc:
                raise ValueError(f"{WORKERS_ENV} must be an integer, got {raw!r}") from exc
        else:
            workers = os.cpu_count() or 1
    if workers < 1:
        raise ValueError(f"worker count must be >= 1, got {workers}")
    return workers


def _process_executor(workers: int) -> concurrent.futures.Executor:
    ctx = multiprocessing.get_context("spawn")
    return concurrent.futures.ProcessPoolExecutor(max_workers=workers, mp_context=ctx)


def create_executor(
    name: str, workers: int, allow_fallback: bool = True
) -> ExecutorHandle:
    name = name.lower()
    if name == "thread":
        return ExecutorHandle(
            concurrent.futures.ThreadPoolExecutor(max_workers=workers), "thread", workers
        )
    if name == "process":
        try:
            return ExecutorHandle(_process_executor(workers), "process", workers)
        except (OSError, NotImplementedError, ImportError) as exc:
            if not allow_fallback:
                raise ExecutorNotAvailable(f"process pool unavailable: {exc}") from exc
            # Restricted environments (no semaphores, no fork/spawn) still get threads.
            print(f"[executor] process pool unavailable ({exc}); falling back to threads")
            return ExecutorHandle(
                concurrent.futures.ThreadPoolExecutor(max_workers=workers),
                "thread",
                workers,
            )
    raise ValueError(f"Unknown backend {name}")
