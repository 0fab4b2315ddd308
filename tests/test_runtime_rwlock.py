"""Tests for the RWLock guarding the current-locale store.

Tests verify:
- Shared reads and exclusive writes
- Writer preference
- Reentrant reads
- Upgrade, downgrade and nested-write rejection
- Timeouts
"""

import threading
import time

import pytest

from loctable.runtime import RWLock


class TestRWLockBasics:
    """Basic acquisition."""

    def test_single_reader(self) -> None:
        """A reader acquires and releases."""
        lock = RWLock()
        with lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_single_writer(self) -> None:
        """A writer acquires and releases."""
        lock = RWLock()
        with lock.write():
            assert lock.writer_active
        assert not lock.writer_active

    def test_concurrent_readers(self) -> None:
        """Readers share the lock."""
        lock = RWLock()
        inside = threading.Barrier(3, timeout=2.0)

        def reader() -> None:
            with lock.read():
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert lock.reader_count == 0

    def test_reentrant_read(self) -> None:
        """A thread may nest read acquisitions."""
        lock = RWLock()
        with lock.read(), lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0


class TestRWLockExclusion:
    """Writers exclude everyone else."""

    def test_writer_blocks_reader(self) -> None:
        """A reader times out while a writer holds the lock."""
        lock = RWLock()
        with lock.write():
            errors: list[BaseException] = []

            def reader() -> None:
                try:
                    with lock.read(timeout=0.05):
                        pass
                except TimeoutError as e:
                    errors.append(e)

            thread = threading.Thread(target=reader)
            thread.start()
            thread.join()
        assert len(errors) == 1

    def test_reader_blocks_writer(self) -> None:
        """A writer times out while a reader holds the lock."""
        lock = RWLock()
        with lock.read():
            errors: list[BaseException] = []

            def writer() -> None:
                try:
                    with lock.write(timeout=0.05):
                        pass
                except TimeoutError as e:
                    errors.append(e)

            thread = threading.Thread(target=writer)
            thread.start()
            thread.join()
        assert len(errors) == 1

    def test_writer_preference(self) -> None:
        """New readers wait behind a waiting writer."""
        lock = RWLock()
        reader_holding = threading.Event()
        release_reader = threading.Event()
        order: list[str] = []

        def first_reader() -> None:
            with lock.read():
                reader_holding.set()
                release_reader.wait(timeout=2.0)

        def writer() -> None:
            with lock.write(timeout=2.0):
                order.append("writer")

        def late_reader() -> None:
            with lock.read(timeout=2.0):
                order.append("reader")

        holder = threading.Thread(target=first_reader)
        holder.start()
        reader_holding.wait(timeout=2.0)

        writer_thread = threading.Thread(target=writer)
        writer_thread.start()
        deadline = time.monotonic() + 2.0
        while lock.writers_waiting == 0 and time.monotonic() < deadline:
            time.sleep(0.001)

        late = threading.Thread(target=late_reader)
        late.start()
        time.sleep(0.02)
        release_reader.set()

        for thread in (holder, writer_thread, late):
            thread.join()
        assert order == ["writer", "reader"]

    def test_writer_timeout_releases_waiting_readers(self) -> None:
        """A writer giving up lets blocked readers proceed."""
        lock = RWLock()
        acquired = threading.Event()

        with lock.read():

            def writer() -> None:
                with pytest.raises(TimeoutError), lock.write(timeout=0.05):
                    pass

            writer_thread = threading.Thread(target=writer)
            writer_thread.start()
            writer_thread.join()

            def reader() -> None:
                with lock.read(timeout=1.0):
                    acquired.set()

            reader_thread = threading.Thread(target=reader)
            reader_thread.start()
            reader_thread.join()

        assert acquired.is_set()
        assert lock.writers_waiting == 0


class TestRWLockMisuse:
    """Patterns that would deadlock are rejected."""

    def test_upgrade_rejected(self) -> None:
        """Read then write on one thread."""
        lock = RWLock()
        with lock.read(), pytest.raises(RuntimeError, match="upgrade"), lock.write():
            pass

    def test_downgrade_rejected(self) -> None:
        """Write then read on one thread."""
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError), lock.read():
            pass

    def test_nested_write_rejected(self) -> None:
        """The write lock is not reentrant."""
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="reentrant"), lock.write():
            pass

    def test_negative_timeout(self) -> None:
        """Timeouts must be non-negative."""
        lock = RWLock()
        with pytest.raises(ValueError, match="non-negative"), lock.read(timeout=-1):
            pass

    def test_zero_timeout_uncontended(self) -> None:
        """A zero timeout succeeds when the lock is free."""
        lock = RWLock()
        with lock.write(timeout=0.0):
            assert lock.writer_active
