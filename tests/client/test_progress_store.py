"""
Test suite for the Local Progress Store implementations.

System role: Verification of device-local persistence
"""

import json
from pathlib import Path

import pytest

from worksync.client.progress_store import FileProgressStore, InMemoryProgressStore
from worksync.client.state import ChecklistProgressState
from worksync.core.exceptions import StorageUnavailableError


def make_state(session="ws-1", document="docA", progress=None, last_updated=1) -> ChecklistProgressState:
    return ChecklistProgressState(
        work_session_id=session,
        document_id=document,
        progress=progress if progress is not None else {"s1": True},
        last_updated=last_updated,
    )


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path: Path):
    """Run each contract test against both store implementations."""
    if request.param == "memory":
        return InMemoryProgressStore()
    return FileProgressStore(tmp_path / "progress")


class TestProgressStoreContract:
    """Behaviour shared by every ProgressStore."""

    def test_write_then_read_returns_record(self, store) -> None:
        store.write(make_state(progress={"s1": True, "s2": False}))

        state = store.read("ws-1", "docA")

        assert state is not None
        assert state.progress == {"s1": True, "s2": False}
        assert state.last_updated == 1

    def test_write_overwrites_same_key(self, store) -> None:
        store.write(make_state(progress={"s1": False}, last_updated=1))
        store.write(make_state(progress={"s1": True}, last_updated=2))

        assert len(store.list_all()) == 1
        assert store.read("ws-1", "docA").progress == {"s1": True}

    def test_documents_of_one_session_do_not_collide(self, store) -> None:
        store.write(make_state(document="docA", last_updated=5))
        store.write(make_state(document="docB", progress={"x": True}, last_updated=9))

        assert store.read("ws-1", "docA").document_id == "docA"
        assert store.read("ws-1", "docB").progress == {"x": True}
        # Session-keyed lookup yields the latest record
        assert store.read("ws-1").document_id == "docB"

    def test_read_missing_returns_none(self, store) -> None:
        assert store.read("ws-unknown") is None
        assert store.read("ws-unknown", "docA") is None

    def test_delete_single_record(self, store) -> None:
        store.write(make_state(document="docA"))
        store.write(make_state(document="docB"))

        store.delete("ws-1", "docA")

        assert store.read("ws-1", "docA") is None
        assert store.read("ws-1", "docB") is not None

    def test_delete_whole_session(self, store) -> None:
        store.write(make_state(document="docA"))
        store.write(make_state(document="docB"))
        store.write(make_state(session="ws-2"))

        store.delete("ws-1")

        assert [s.work_session_id for s in store.list_all()] == ["ws-2"]

    def test_returned_records_are_copies(self, store) -> None:
        store.write(make_state(progress={"s1": False}))

        state = store.read("ws-1", "docA")
        state.progress["s1"] = True

        assert store.read("ws-1", "docA").progress == {"s1": False}


class TestFileProgressStore:
    """FileProgressStore specifics."""

    def test_records_survive_a_new_instance(self, tmp_path: Path) -> None:
        FileProgressStore(tmp_path).write(make_state(last_updated=42))

        state = FileProgressStore(tmp_path).read("ws-1", "docA")

        assert state is not None
        assert state.last_updated == 42

    def test_record_is_persisted_in_camel_case(self, tmp_path: Path) -> None:
        FileProgressStore(tmp_path).write(make_state(last_updated=7))

        (path,) = tmp_path.glob("work_session_*.json")
        assert json.loads(path.read_text()) == {
            "workSessionId": "ws-1",
            "documentId": "docA",
            "progress": {"s1": True},
            "lastUpdated": 7,
        }

    def test_no_temp_files_left_behind(self, tmp_path: Path) -> None:
        store = FileProgressStore(tmp_path)
        for stamp in range(1, 4):
            store.write(make_state(last_updated=stamp))

        assert [p.name for p in tmp_path.iterdir() if p.name.startswith(".tmp_")] == []

    def test_corrupt_record_is_skipped(self, tmp_path: Path, caplog) -> None:
        store = FileProgressStore(tmp_path)
        store.write(make_state(document="docA"))
        (tmp_path / "work_session_broken.json").write_text("{not json")

        records = store.list_all()

        assert [s.document_id for s in records] == ["docA"]
        assert "Skipping unreadable progress record" in caplog.text

    def test_unusable_directory_raises_storage_unavailable(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(StorageUnavailableError):
            FileProgressStore(blocker / "progress")

    def test_write_failure_raises_storage_unavailable(self, tmp_path: Path) -> None:
        store = FileProgressStore(tmp_path / "progress")
        (tmp_path / "progress").rmdir()

        with pytest.raises(StorageUnavailableError):
            store.write(make_state())
