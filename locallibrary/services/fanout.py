"""Concurrent fan-out/fan-in for independent reads within one request."""
from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Dict

from locallibrary import config as app_config
from locallibrary.utils.logging import get_logger

LOG = get_logger("services.fanout")


def gather(**calls: Callable[[], Any]) -> Dict[str, Any]:
    """Run zero-argument callables concurrently and return their results by name.

    First error wins: as soon as one call raises, calls that have not
    started are cancelled and that exception propagates to the caller.
    """
    if not calls:
        return {}
    workers = min(app_config.fanout_max_workers(), len(calls))
    if workers <= 1:
        return {name: fn() for name, fn in calls.items()}

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="fanout") as pool:
        futures: Dict[str, Future] = {name: pool.submit(fn) for name, fn in calls.items()}
        done, pending = wait(futures.values(), return_when=FIRST_EXCEPTION)
        failed = next((f for f in futures.values() if f in done and f.exception() is not None), None)
        if failed is not None:
            for future in pending:
                future.cancel()
            name = next(n for n, f in futures.items() if f is failed)
            LOG.debug("fan-out call %s failed; cancelled %s pending", name, len(pending))
            raise failed.exception()  # type: ignore[misc]
        return {name: future.result() for name, future in futures.items()}


__all__ = ["gather"]
