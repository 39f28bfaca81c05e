"""Tests for per-group locking."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from gridedit.audit import audit_group, audit_tab
from gridedit.engine import delete_cell, delete_row, insert_cell, insert_row
from gridedit.locks import _group_locks, group_lock, lock_for, registered_paths
from gridedit.schemas import NodeKind


class TestLockFor:
    """Tests for lock_for function."""

    def test_same_directory_same_lock(self, tmp_path: Path) -> None:
        (tmp_path / "row1").mkdir()

        assert lock_for(tmp_path / "row1") is lock_for(tmp_path / "row1" / ".." / "row1")

    def test_different_directories_different_locks(self, tmp_path: Path) -> None:
        assert lock_for(tmp_path / "row1") is not lock_for(tmp_path / "row2")


class TestGroupLock:
    """Tests for group_lock context manager."""

    def test_holds_and_releases(self, tmp_path: Path) -> None:
        tab, row = tmp_path / "tab1", tmp_path / "tab1" / "row1"

        with group_lock(tab, row):
            assert lock_for(tab).locked()
            assert lock_for(row).locked()

        assert not lock_for(tab).locked()
        assert not lock_for(row).locked()

    def test_duplicate_paths_acquired_once(self, tmp_path: Path) -> None:
        with group_lock(tmp_path, tmp_path):
            assert lock_for(tmp_path).locked()

        assert not lock_for(tmp_path).locked()

    def test_registry_drops_released_directories(self, tmp_path: Path) -> None:
        tab, row = tmp_path / "tab1", tmp_path / "tab1" / "row1"

        with group_lock(tab, row):
            assert {tab.resolve(), row.resolve()} <= registered_paths()

        assert tab.resolve() not in registered_paths()
        assert row.resolve() not in registered_paths()

    def test_released_on_error(self, tmp_path: Path) -> None:
        try:
            with group_lock(tmp_path):
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert not lock_for(tmp_path).locked()


class TestConcurrentOperations:
    """Concurrent requests on one group keep it contiguous."""

    def test_parallel_cell_inserts(self, row_dir: Path, read_state) -> None:
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: insert_cell(row_dir / "cell1", 1), range(12)))

        state = read_state(row_dir)
        assert len(results) == 12
        assert [name for name, _, _ in state] == [f"cell{n}" for n in range(1, 16)]
        assert audit_group(row_dir, NodeKind.CELL, row_number=1) == []

    def test_parallel_inserts_and_deletes_across_rows(self, tab_dir: Path) -> None:
        def work(index: int) -> None:
            if index % 3 == 0:
                insert_row(tab_dir / "row1", 1)
            elif index % 3 == 1:
                insert_cell(tab_dir / "row1" / "cell1", 1)
            else:
                delete_cell(tab_dir / "row1" / "cell2", 2)

        with ThreadPoolExecutor(max_workers=6) as pool:
            list(pool.map(work, range(6)))

        assert audit_tab(tab_dir) == []

    def test_deleted_rows_leave_no_locks(self, tab_dir: Path) -> None:
        delete_cell(tab_dir / "row3" / "cell1", 1)
        delete_row(tab_dir / "row3")

        assert (tab_dir / "row3").resolve() not in _group_locks
        assert tab_dir.resolve() not in _group_locks
