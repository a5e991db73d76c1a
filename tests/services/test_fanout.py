"""Tests for concurrent fan-out of independent reads."""
from __future__ import annotations

import threading
import time

import pytest

from locallibrary.services import fanout


def test_gather_returns_results_by_name(monkeypatch):
    monkeypatch.setenv("LOCALLIBRARY_FANOUT_WORKERS", "4")

    results = fanout.gather(a=lambda: 1, b=lambda: "two", c=lambda: [3])

    assert results == {"a": 1, "b": "two", "c": [3]}


def test_gather_with_no_calls_is_empty():
    assert fanout.gather() == {}


def test_gather_runs_calls_concurrently(monkeypatch):
    monkeypatch.setenv("LOCALLIBRARY_FANOUT_WORKERS", "2")
    barrier = threading.Barrier(2, timeout=5)

    def wait_for_peer():
        barrier.wait()
        return threading.current_thread().name

    results = fanout.gather(first=wait_for_peer, second=wait_for_peer)

    assert results["first"] != results["second"]


def test_gather_first_error_wins(monkeypatch):
    monkeypatch.setenv("LOCALLIBRARY_FANOUT_WORKERS", "2")

    def boom():
        raise KeyError("missing")

    def slow():
        time.sleep(0.05)
        return "late"

    with pytest.raises(KeyError):
        fanout.gather(ok=slow, bad=boom)


def test_gather_inline_when_single_worker(monkeypatch):
    monkeypatch.setenv("LOCALLIBRARY_FANOUT_WORKERS", "1")
    caller = threading.current_thread().name

    results = fanout.gather(a=lambda: threading.current_thread().name)

    assert results == {"a": caller}
