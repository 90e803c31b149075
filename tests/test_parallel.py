"""Tests for the thread-pool map and the pixel counter."""

import threading

import pytest

from blockify.core_types import PixelCounter
from blockify.parallel import THREAD_PREFIX, parallel_map


class TestParallelMap:

    def test_results_in_input_order(self):
        assert parallel_map(list(range(20)), 4, lambda _name, x: x * x) == [
            x * x for x in range(20)
        ]

    def test_thread_names_are_passed(self):
        names = parallel_map([1, 2, 3], 2, lambda name, _x: name)
        assert all(n.startswith(THREAD_PREFIX) for n in names)

    def test_default_worker_count(self):
        assert parallel_map(["a", "b"], None, lambda _n, s: s.upper()) == ["A", "B"]

    def test_empty(self):
        assert parallel_map([], 3, lambda _n, x: x) == []

    def test_exception_propagates(self):
        def boom(_name, x):
            if x == 3:
                raise RuntimeError("bad item")
            return x

        with pytest.raises(RuntimeError, match="bad item"):
            parallel_map(list(range(6)), 3, boom)


class TestPixelCounter:

    def test_concurrent_adds(self):
        counter = PixelCounter()

        def work():
            for _ in range(1000):
                counter.add(3)

        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert counter.value == 24000

    def test_reset(self):
        counter = PixelCounter()
        counter.add(10)
        counter.reset()
        assert counter.value == 0
