"""A single JSON document shared by all JSON repositories.

Every repository method runs inside ``JsonStore.transaction()``. The
outermost transaction loads the document, lets the caller mutate it in
memory, and writes it back only if the block finishes without raising.
Nested transactions join the outer one, which is how the cart-to-order
conversion spans carts, orders and stock in a single commit.

All transactions on the same file are serialized by one process-wide
re-entrant lock, so concurrent adds of the same product item cannot both
insert a line.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog

from shopcore.domain.exceptions import StorageError

logger = structlog.get_logger(__name__)

_COLLECTIONS = ("carts", "cart_items", "orders", "payments", "product_items")
_SEQUENCES = ("cart", "cart_item", "order_line")

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _locks_guard:
        return _locks.setdefault(path, threading.RLock())


def empty_document() -> dict:
    doc: dict = {name: [] for name in _COLLECTIONS}
    doc["sequences"] = {name: 0 for name in _SEQUENCES}
    return doc


def _dump(doc: dict) -> str:
    return json.dumps(doc, indent=2) + "\n"


def next_id(doc: dict, sequence: str) -> int:
    """Advance and return an integer sequence stored in the document."""
    doc["sequences"][sequence] += 1
    return doc["sequences"][sequence]


class JsonStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()
        self._lock = _lock_for(self._file_path)
        self._doc: dict | None = None
        self._depth = 0
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    @contextmanager
    def transaction(self) -> Iterator[dict]:
        with self._lock:
            if self._depth > 0:
                self._depth += 1
                try:
                    yield self._doc  # type: ignore[misc]
                finally:
                    self._depth -= 1
                return

            self._doc = self._load()
            original = _dump(self._doc)
            self._depth = 1
            try:
                yield self._doc
            except Exception as exc:
                logger.warning(
                    "Rolled back transaction",
                    store=str(self._file_path),
                    error=type(exc).__name__,
                )
                raise
            else:
                serialized = _dump(self._doc)
                if serialized != original:
                    self._persist(serialized)
                    logger.debug("Committed transaction", store=str(self._file_path))
            finally:
                self._doc = None
                self._depth = 0

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read store {self._file_path}: {exc}") from exc

        doc = empty_document()
        doc.update({k: v for k, v in raw.items() if k in _COLLECTIONS})
        doc["sequences"].update(raw.get("sequences", {}))
        return doc

    def _persist(self, serialized: str) -> None:
        # Write to a sibling temp file and swap it in, so a crash never
        # leaves a half-written document behind.
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=".store-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(serialized)
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            raise StorageError(f"Cannot write store {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            try:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text(
                    _dump(empty_document()), encoding="utf-8"
                )
            except OSError as exc:
                raise StorageError(
                    f"Cannot create store {self._file_path}: {exc}"
                ) from exc
