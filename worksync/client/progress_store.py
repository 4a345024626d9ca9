"""
Local Progress Store.

Durable, synchronous key-value persistence of ChecklistProgressState on one
device. Records are keyed by (workSessionId, documentId); looking a session
up without a document returns its most recently updated record.

FileProgressStore keeps one JSON file per record and replaces it atomically,
so a write that returned is on disk even if the process exits right after.
Any I/O failure surfaces as StorageUnavailableError for the Session State
Manager to absorb.

Dependencies: pydantic, worksync.client.state
System role: Leaf persistence for offline progress
"""

from abc import ABC, abstractmethod
import hashlib
import json
import logging
import os
from pathlib import Path
import tempfile

from pydantic import ValidationError as PydanticValidationError

from worksync.client.state import ChecklistProgressState, RecordKey
from worksync.core.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)

RECORD_PREFIX = "work_session_"
RECORD_SUFFIX = ".json"


class ProgressStore(ABC):
    """Device-local persistence of checklist progress records."""

    @abstractmethod
    def write(self, state: ChecklistProgressState) -> None:
        """Insert or overwrite the record with the same key."""

    @abstractmethod
    def read(
        self,
        work_session_id: str,
        document_id: str | None = None,
    ) -> ChecklistProgressState | None:
        """Return the record for the pair, or the session's latest record."""

    @abstractmethod
    def delete(self, work_session_id: str, document_id: str | None = None) -> None:
        """Remove the record for the pair, or every record of the session."""

    @abstractmethod
    def list_all(self) -> list[ChecklistProgressState]:
        """Return every stored record."""


def _latest(records: list[ChecklistProgressState]) -> ChecklistProgressState | None:
    return max(records, key=lambda state: state.last_updated, default=None)


class InMemoryProgressStore(ProgressStore):
    """Process-lifetime store; fallback when durable storage is unavailable."""

    def __init__(self) -> None:
        self._records: dict[RecordKey, ChecklistProgressState] = {}

    def write(self, state: ChecklistProgressState) -> None:
        self._records[state.key] = state.model_copy(deep=True)

    def read(
        self,
        work_session_id: str,
        document_id: str | None = None,
    ) -> ChecklistProgressState | None:
        if document_id is not None:
            state = self._records.get((work_session_id, document_id))
        else:
            state = _latest(
                [s for key, s in self._records.items() if key[0] == work_session_id]
            )
        return state.model_copy(deep=True) if state else None

    def delete(self, work_session_id: str, document_id: str | None = None) -> None:
        if document_id is not None:
            self._records.pop((work_session_id, document_id), None)
            return
        for key in [key for key in self._records if key[0] == work_session_id]:
            del self._records[key]

    def list_all(self) -> list[ChecklistProgressState]:
        return [state.model_copy(deep=True) for state in self._records.values()]


class FileProgressStore(ProgressStore):
    """
    One JSON file per record under a directory.

    File names hash the key so arbitrary identifiers are safe on disk; the
    record itself carries the real identifiers.
    """

    def __init__(self, directory: str | Path) -> None:
        """
        Initialize the store, creating the directory if needed.

        Args:
            directory: Where records are kept

        Raises:
            StorageUnavailableError: If the directory cannot be created
        """
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailableError(
                f"Cannot create progress directory: {e}",
                path=str(self.directory),
            ) from e

    def _path_for(self, key: RecordKey) -> Path:
        digest = hashlib.sha256("\x1f".join(key).encode("utf-8")).hexdigest()[:32]
        return self.directory / f"{RECORD_PREFIX}{digest}{RECORD_SUFFIX}"

    def _load(self, path: Path) -> ChecklistProgressState | None:
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageUnavailableError(f"Cannot read progress record: {e}", path=str(path)) from e

        try:
            return ChecklistProgressState.model_validate(json.loads(raw))
        except (json.JSONDecodeError, PydanticValidationError):
            logger.warning("Skipping unreadable progress record %s", path.name)
            return None

    def write(self, state: ChecklistProgressState) -> None:
        target = self._path_for(state.key)
        payload = json.dumps(state.to_record(), separators=(",", ":"))
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".tmp_", suffix=RECORD_SUFFIX)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageUnavailableError(f"Cannot write progress record: {e}", path=str(target)) from e

    def read(
        self,
        work_session_id: str,
        document_id: str | None = None,
    ) -> ChecklistProgressState | None:
        if document_id is not None:
            return self._load(self._path_for((work_session_id, document_id)))
        return _latest([s for s in self.list_all() if s.work_session_id == work_session_id])

    def delete(self, work_session_id: str, document_id: str | None = None) -> None:
        if document_id is not None:
            paths = [self._path_for((work_session_id, document_id))]
        else:
            paths = [
                self._path_for(state.key)
                for state in self.list_all()
                if state.work_session_id == work_session_id
            ]
        for path in paths:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                raise StorageUnavailableError(
                    f"Cannot delete progress record: {e}",
                    path=str(path),
                ) from e

    def list_all(self) -> list[ChecklistProgressState]:
        try:
            paths = sorted(self.directory.glob(f"{RECORD_PREFIX}*{RECORD_SUFFIX}"))
        except OSError as e:
            raise StorageUnavailableError(
                f"Cannot list progress records: {e}",
                path=str(self.directory),
            ) from e
        records = [self._load(path) for path in paths]
        return [state for state in records if state is not None]
