"""
Todo REST Backend — Todo Store (In-memory Map + CSV Mirror)
=============================================================

What:  Holds every todo in a dict keyed by string ID, optionally mirrored to
       a CSV data file.
Why:   The store is the only mutable state of the service; keeping it in one
       object makes it injectable and trivially replaceable in tests.
How:   In-memory operations run under a threading.Lock. File operations use
       aiofiles and run under an asyncio.Lock so two saves never interleave.
Who:   Created once per application by create_app(); used by TodoService.

ID assignment:
    IDs are the decimal string of the store size at insertion time, so the
    keys are always exactly "0".."n-1". Removing a record renumbers every
    remaining record to keep that true. IDs are therefore NOT stable: a
    client holding ID "3" refers to a different todo after "1" is deleted.

    Renumbering keeps the previous ascending-ID order: the record that was
    "2" before a delete of "1" becomes "1", never some other position.

Persistence model:
    - save_to_file(): full rewrite of all rows in ascending ID order
    - load_from_file(): replaces the store with the file rows, 0-indexed in
      file order (row index is both key and id; the file's own id column is
      ignored)
    Both are no-ops while persistence is disabled.
"""

import asyncio
import csv
import io
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional

import aiofiles

from todo_api.exceptions import PersistenceError
from todo_api.models.todo import Todo

logger = logging.getLogger(__name__)


def _numeric_id(todo: Todo) -> int:
    return int(todo.id)


class TodoStore:
    """
    Mapping from string ID to Todo with optional CSV persistence.

    Every value handed out is a copy; callers can never mutate the stored
    records behind the store's back.
    """

    def __init__(self, data_file: str = "data.csv", file_persistence: bool = False):
        """
        Args:
            data_file: Path of the CSV mirror (only touched when persistence is on)
            file_persistence: Mirror mutations to data_file when True
        """
        self.data_file = Path(data_file)
        self.file_persistence = file_persistence
        self._todos: Dict[str, Todo] = {}
        self._lock = threading.Lock()
        self._file_lock = asyncio.Lock()

    # ── Persistence switch ────────────────────────────────────────────────

    def enable_file_persistence(self) -> None:
        self.file_persistence = True

    def disable_file_persistence(self) -> None:
        self.file_persistence = False

    # ── In-memory operations ──────────────────────────────────────────────

    def __len__(self) -> int:
        with self._lock:
            return len(self._todos)

    @property
    def count(self) -> int:
        """Number of stored todos."""
        return len(self)

    def list(self) -> List[Todo]:
        """Snapshot copy of all todos. No ordering is promised."""
        with self._lock:
            return [todo.model_copy() for todo in self._todos.values()]

    def get(self, todo_id: str) -> Optional[Todo]:
        with self._lock:
            todo = self._todos.get(todo_id)
            return todo.model_copy() if todo is not None else None

    def add(self, todo: Todo) -> Todo:
        """Stores a copy of `todo` under the next free ID and returns it."""
        with self._lock:
            todo_id = str(len(self._todos))
            stored = todo.model_copy(update={"id": todo_id})
            self._todos[todo_id] = stored
            return stored.model_copy()

    def update(self, todo_id: str, todo: Todo) -> Optional[Todo]:
        """
        Replaces the record at `todo_id`.

        The stored record always carries `todo_id` as its id, whatever
        `todo.id` says. Returns None when no record has that ID.
        """
        with self._lock:
            if todo_id not in self._todos:
                return None
            stored = todo.model_copy(update={"id": todo_id})
            self._todos[todo_id] = stored
            return stored.model_copy()

    def remove(self, todo_id: str) -> bool:
        """
        Deletes the record at `todo_id` and renumbers the rest from 0.

        Returns False when no record has that ID.
        """
        with self._lock:
            if todo_id not in self._todos:
                return False
            remaining = sorted(
                (todo for key, todo in self._todos.items() if key != todo_id),
                key=_numeric_id,
            )
            self._todos = {
                str(index): todo.model_copy(update={"id": str(index)})
                for index, todo in enumerate(remaining)
            }
            return True

    def clear(self) -> None:
        with self._lock:
            self._todos = {}

    # ── CSV persistence ───────────────────────────────────────────────────

    async def load_from_file(self) -> None:
        """
        Replaces the store with the contents of the data file.

        A missing file leaves an empty store (first run). An unreadable or
        malformed file raises PersistenceError: starting with an empty store
        would wipe the file on the next save.
        """
        if not self.file_persistence:
            return

        try:
            async with aiofiles.open(self.data_file, "r", encoding="utf-8", newline="") as f:
                content = await f.read()
        except FileNotFoundError:
            logger.warning("Data file %s not found; starting with an empty store", self.data_file)
            self.clear()
            return
        except UnicodeDecodeError as e:
            logger.error("Data file %s is not valid UTF-8: %s", self.data_file, str(e))
            raise PersistenceError(
                message="Malformed data file",
                path=str(self.data_file),
                context={"error": str(e)},
            )
        except OSError as e:
            logger.error("Cannot read data file %s: %s", self.data_file, str(e))
            raise PersistenceError(
                message="Cannot read data file",
                path=str(self.data_file),
                context={"os_error": str(e)},
            )

        todos: Dict[str, Todo] = {}
        try:
            for row in csv.reader(io.StringIO(content)):
                if not row:
                    continue  # blank line
                todo_id = str(len(todos))
                todos[todo_id] = Todo.from_row(row).model_copy(update={"id": todo_id})
        except (csv.Error, ValueError) as e:
            logger.error("Malformed data file %s: %s", self.data_file, str(e))
            raise PersistenceError(
                message="Malformed data file",
                path=str(self.data_file),
                context={"error": str(e)},
            )

        with self._lock:
            self._todos = todos
        logger.info("Loaded %d todos from %s", len(todos), self.data_file)

    async def save_to_file(self) -> None:
        """Rewrites the whole data file from the current store contents."""
        if not self.file_persistence:
            return

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        # Minimal quoting leaves a lone "\r" bare, which the reader rejects
        quoting_writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_ALL)
        for todo in sorted(self.list(), key=_numeric_id):
            row = todo.serialize()
            if any("\r" in field for field in row):
                quoting_writer.writerow(row)
            else:
                writer.writerow(row)

        async with self._file_lock:
            try:
                self.data_file.parent.mkdir(parents=True, exist_ok=True)
                async with aiofiles.open(self.data_file, "w", encoding="utf-8", newline="") as f:
                    await f.write(buffer.getvalue())
            except OSError as e:
                logger.critical("Cannot write data file %s: %s", self.data_file, str(e))
                raise PersistenceError(
                    message="Cannot write data file",
                    path=str(self.data_file),
                    context={"os_error": str(e)},
                )

        logger.debug("Saved todos to %s", self.data_file)
