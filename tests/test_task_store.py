import itertools
import threading
import unittest
from unittest.mock import patch

from checklist.errors import StorageReadError, StorageWriteError, TaskNotFound
from checklist.storage.backends import MemoryBackend
from checklist.storage.task_store import TaskStore, monotonic_id, timestamp_id


def counter_ids(start=1):
    counter = itertools.count(start)
    return lambda existing: next(counter)


class InterleavingBackend(MemoryBackend):
    """Parks the first read until ``resume`` is set, so a second call can run in between."""

    def __init__(self):
        super().__init__()
        self.first_read_done = threading.Event()
        self.resume = threading.Event()
        self._reads = 0

    def read(self):
        records = super().read()
        self._reads += 1
        if self._reads == 1:
            self.first_read_done.set()
            self.resume.wait(timeout=5)
        return records


class TaskStoreTestCase(unittest.TestCase):
    def setUp(self):
        self.backend = MemoryBackend()
        self.store = TaskStore(self.backend, id_factory=counter_ids())

    def test_create_returns_uncompleted_task_with_fresh_id(self):
        existing = self.store.create("walk dog")
        task = self.store.create("buy milk")
        self.assertEqual(task.text, "buy milk")
        self.assertFalse(task.completed)
        self.assertNotEqual(task.id, existing.id)

    def test_create_appends_and_persists(self):
        a = self.store.create("a")
        b = self.store.create("b")
        self.assertEqual(
            self.backend.read(),
            [
                {"id": a.id, "text": "a", "completed": False},
                {"id": b.id, "text": "b", "completed": False},
            ],
        )

    def test_list_keeps_insertion_order(self):
        for text in ["a", "b", "c"]:
            self.store.create(text)
        self.assertEqual([t.text for t in self.store.list()], ["a", "b", "c"])

    def test_set_completed_only_changes_target(self):
        a = self.store.create("a")
        b = self.store.create("b")
        updated = self.store.set_completed(a.id, True)
        self.assertTrue(updated.completed)
        tasks = {t.id: t for t in self.store.list()}
        self.assertTrue(tasks[a.id].completed)
        self.assertFalse(tasks[b.id].completed)

    def test_set_completed_does_not_reorder_store(self):
        a = self.store.create("a")
        b = self.store.create("b")
        self.store.set_completed(a.id, True)
        self.assertEqual([t.id for t in self.store.list()], [a.id, b.id])

    def test_set_completed_back_to_false(self):
        a = self.store.create("a")
        self.store.set_completed(a.id, True)
        self.store.set_completed(a.id, False)
        self.assertFalse(self.store.list()[0].completed)

    def test_set_completed_unknown_id_raises_without_writing(self):
        self.store.create("a")
        before = self.store.list()
        writes = self.backend.write_count
        with self.assertRaises(TaskNotFound) as ctx:
            self.store.set_completed(999, True)
        self.assertEqual(ctx.exception.task_id, 999)
        self.assertEqual(self.backend.write_count, writes)
        self.assertEqual(self.store.list(), before)

    def test_delete_removes_task(self):
        a = self.store.create("a")
        b = self.store.create("b")
        self.store.delete(a.id)
        self.assertEqual([t.id for t in self.store.list()], [b.id])

    def test_delete_unknown_id_is_noop(self):
        self.store.create("a")
        before = self.store.list()
        self.store.delete(12345)
        self.assertEqual(self.store.list(), before)

    def test_read_failure_propagates(self):
        self.backend.fail_reads = True
        with self.assertRaises(StorageReadError):
            self.store.list()
        with self.assertRaises(StorageReadError):
            self.store.create("a")

    def test_write_failure_leaves_task_unsaved(self):
        self.store.create("a")
        self.backend.fail_writes = True
        with self.assertRaises(StorageWriteError):
            self.store.create("b")
        self.backend.fail_writes = False
        self.assertEqual([t.text for t in self.store.list()], ["a"])

    def test_malformed_record_is_a_read_error(self):
        store = TaskStore(MemoryBackend([{"text": "no id"}]))
        with self.assertRaises(StorageReadError):
            store.list()

    def test_non_integer_id_is_a_read_error(self):
        store = TaskStore(MemoryBackend([{"id": "7", "text": "a", "completed": False}]), id_factory=monotonic_id)
        with self.assertRaises(StorageReadError):
            store.create("b")
        with self.assertRaises(StorageReadError):
            TaskStore(MemoryBackend([{"id": True, "text": "a"}])).list()

    def test_extra_fields_in_records_are_ignored(self):
        store = TaskStore(MemoryBackend([{"id": 1, "text": "a", "completed": True, "color": "red"}]))
        task = store.list()[0]
        self.assertEqual(task.to_dict(), {"id": 1, "text": "a", "completed": True})


class IdFactoryTestCase(unittest.TestCase):
    def test_timestamp_id_is_current_millisecond(self):
        with patch("checklist.storage.task_store._now_ms", return_value=1700000000123):
            self.assertEqual(timestamp_id([]), 1700000000123)

    def test_timestamp_ids_collide_within_one_millisecond(self):
        # Known boundary of the timestamp scheme; kept as-is
        store = TaskStore(MemoryBackend(), id_factory=timestamp_id)
        with patch("checklist.storage.task_store._now_ms", return_value=42):
            a = store.create("a")
            b = store.create("b")
        self.assertEqual(a.id, b.id)

    def test_monotonic_ids_are_distinct_within_one_millisecond(self):
        store = TaskStore(MemoryBackend(), id_factory=monotonic_id)
        with patch("checklist.storage.task_store._now_ms", return_value=42):
            ids = [store.create(str(i)).id for i in range(5)]
        self.assertEqual(ids, [42, 43, 44, 45, 46])

    def test_monotonic_id_follows_clock_when_ahead(self):
        store = TaskStore(MemoryBackend([{"id": 10, "text": "a", "completed": False}]))
        with patch("checklist.storage.task_store._now_ms", return_value=500):
            self.assertEqual(monotonic_id(store.list()), 500)


class ConcurrencyTestCase(unittest.TestCase):
    def test_interleaved_creates_lose_an_update_without_gate(self):
        backend = InterleavingBackend()
        store = TaskStore(backend, id_factory=counter_ids())
        worker = threading.Thread(target=store.create, args=("a",))
        worker.start()
        self.assertTrue(backend.first_read_done.wait(timeout=5))
        store.create("b")
        backend.resume.set()
        worker.join(timeout=5)
        # "a" was built on a read taken before "b" was written
        self.assertEqual([t.text for t in store.list()], ["a"])

    def test_serialized_store_keeps_both_interleaved_creates(self):
        backend = InterleavingBackend()
        store = TaskStore(backend, id_factory=counter_ids(), serialize=True)
        first = threading.Thread(target=store.create, args=("a",))
        first.start()
        self.assertTrue(backend.first_read_done.wait(timeout=5))
        second = threading.Thread(target=store.create, args=("b",))
        second.start()
        backend.resume.set()
        first.join(timeout=5)
        second.join(timeout=5)
        self.assertEqual([t.text for t in store.list()], ["a", "b"])

    def test_serialized_store_under_many_threads(self):
        store = TaskStore(MemoryBackend(), id_factory=monotonic_id, serialize=True)

        def worker(n):
            for i in range(5):
                store.create(f"{n}-{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)
        tasks = store.list()
        self.assertEqual(len(tasks), 40)
        self.assertEqual(len({t.id for t in tasks}), 40)


if __name__ == "__main__":
    unittest.main()
