"""Robot snapshot and history persistence layer."""

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

import structlog

from ..errors import PersistenceError
from ..state.models import (
    HISTORY_LIMIT,
    Action,
    Direction,
    HistoryEntry,
    Position,
    RobotState,
    StoredSnapshot,
)
from ..utils.time import format_timestamp, parse_timestamp

logger = structlog.get_logger(__name__)

MEMORY_DB = ":memory:"


class RobotStore:
    """
    SQLite-based append-only robot store.

    Every accepted command appends a row to ``robot_snapshots``; the current
    state is the row with the highest id. ``robot_history`` keeps one row per
    accepted action for the audit trail.
    """

    def __init__(self, db_path: str = ".db/robot.sqlite3", history_limit: int = HISTORY_LIMIT):
        self.db_path = db_path
        self.history_limit = history_limit
        self.logger = logger.bind(db_path=str(db_path))
        self._lock = threading.Lock()
        self._shared_conn: Optional[sqlite3.Connection] = None
        self._conn_lock = threading.RLock()

        if db_path == MEMORY_DB:
            # In-memory databases vanish with their connection
            self._shared_conn = sqlite3.connect(MEMORY_DB, check_same_thread=False)
            self._shared_conn.row_factory = sqlite3.Row
        else:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        with self._get_connection("init_schema", "robot_snapshots") as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS robot_snapshots (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    x INTEGER CHECK (x IS NULL OR (x BETWEEN 0 AND 4)),
                    y INTEGER CHECK (y IS NULL OR (y BETWEEN 0 AND 4)),
                    direction TEXT NOT NULL DEFAULT 'NORTH',
                    is_placed INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS robot_history (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    x INTEGER NOT NULL CHECK (x BETWEEN 0 AND 4),
                    y INTEGER NOT NULL CHECK (y BETWEEN 0 AND 4),
                    direction TEXT NOT NULL,
                    action TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_robot_history_created_at
                ON robot_history(created_at)
            """)

            conn.commit()

    @contextmanager
    def _get_connection(self, operation: str, target: str) -> Iterator[sqlite3.Connection]:
        """Get database connection, translating sqlite errors to PersistenceError."""
        conn = None
        shared = self._shared_conn is not None
        if shared:
            self._conn_lock.acquire()
        try:
            if shared:
                conn = self._shared_conn
            else:
                conn = sqlite3.connect(self.db_path, timeout=30.0)
                conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error(
                "Database error",
                operation=operation,
                target=target,
                error=str(e)
            )
            raise PersistenceError(
                f"Database error during {operation}: {e}",
                operation=operation,
                target=target
            ) from e
        finally:
            if shared:
                self._conn_lock.release()
            elif conn is not None:
                conn.close()

    def _insert_snapshot(self, conn: sqlite3.Connection, state: RobotState, created_at: str) -> int:
        cursor = conn.execute("""
            INSERT INTO robot_snapshots (x, y, direction, is_placed, created_at)
            VALUES (?, ?, ?, ?, ?)
        """, (
            state.position.x if state.position else None,
            state.position.y if state.position else None,
            state.direction.value,
            int(state.is_placed),
            created_at,
        ))
        return cursor.lastrowid

    def _insert_history(self, conn: sqlite3.Connection, entry: HistoryEntry) -> int:
        cursor = conn.execute("""
            INSERT INTO robot_history (x, y, direction, action, created_at)
            VALUES (?, ?, ?, ?, ?)
        """, (
            entry.position.x,
            entry.position.y,
            entry.direction.value,
            entry.action.value,
            format_timestamp(entry.recorded_at),
        ))
        return cursor.lastrowid

    def get_latest_snapshot(self) -> Optional[StoredSnapshot]:
        """Get the most recently appended snapshot, if any."""
        with self._get_connection("get_latest", "robot_snapshots") as conn:
            row = conn.execute("""
                SELECT * FROM robot_snapshots ORDER BY id DESC LIMIT 1
            """).fetchone()

            if row is None:
                return None
            return self._row_to_snapshot(row)

    def get_latest(self) -> RobotState:
        """Current robot state, or the unplaced default when nothing is stored."""
        snapshot = self.get_latest_snapshot()
        if snapshot is None:
            return RobotState.unplaced()
        return snapshot.state

    def append(self, state: RobotState) -> int:
        """
        Append a snapshot without touching earlier rows.

        Args:
            state: Robot state to record

        Returns:
            Row id of the new snapshot
        """
        with self._lock:
            with self._get_connection("append", "robot_snapshots") as conn:
                snapshot_id = self._insert_snapshot(conn, state, format_timestamp())
                conn.commit()

        self.logger.debug("Snapshot appended", snapshot_id=snapshot_id, state=state.to_dict())
        return snapshot_id

    def append_history(self, entry: HistoryEntry) -> int:
        """
        Append one history row.

        Args:
            entry: Accepted action to record

        Returns:
            Row id of the new history entry
        """
        with self._lock:
            with self._get_connection("append_history", "robot_history") as conn:
                history_id = self._insert_history(conn, entry)
                conn.commit()

        self.logger.debug("History appended", history_id=history_id, action=entry.action.value)
        return history_id

    def record_transition(self, state: RobotState, entry: HistoryEntry) -> int:
        """
        Append a snapshot and its history row in one transaction.

        Returns:
            Row id of the new snapshot
        """
        with self._lock:
            with self._get_connection("record_transition", "robot_snapshots") as conn:
                snapshot_id = self._insert_snapshot(
                    conn, state, format_timestamp(entry.recorded_at)
                )
                history_id = self._insert_history(conn, entry)
                conn.commit()

        self.logger.info(
            "Transition recorded",
            snapshot_id=snapshot_id,
            history_id=history_id,
            action=entry.action.value
        )
        return snapshot_id

    def list_history(self, limit: Optional[int] = None) -> list[HistoryEntry]:
        """
        Most recent history entries, newest first.

        Args:
            limit: Maximum rows to return, capped at the store's history limit

        Returns:
            List of HistoryEntry objects
        """
        if limit is None or limit > self.history_limit:
            limit = self.history_limit
        if limit <= 0:
            return []

        with self._get_connection("list_history", "robot_history") as conn:
            rows = conn.execute("""
                SELECT * FROM robot_history ORDER BY id DESC LIMIT ?
            """, (limit,)).fetchall()

            return [self._row_to_history_entry(row) for row in rows]

    def count_snapshots(self) -> int:
        with self._get_connection("count_snapshots", "robot_snapshots") as conn:
            return conn.execute("SELECT COUNT(*) FROM robot_snapshots").fetchone()[0]

    def get_stats(self) -> dict[str, Any]:
        """Get database statistics."""
        with self._get_connection("get_stats", "robot_history") as conn:
            snapshot_count = conn.execute("SELECT COUNT(*) FROM robot_snapshots").fetchone()[0]
            history_count = conn.execute("SELECT COUNT(*) FROM robot_history").fetchone()[0]

            actions = {}
            for row in conn.execute("""
                SELECT action, COUNT(*) AS count FROM robot_history GROUP BY action
            """):
                actions[row[0]] = row[1]

            return {
                "total_snapshots": snapshot_count,
                "total_history": history_count,
                "history_by_action": actions,
            }

    def reset(self) -> None:
        """Remove every snapshot and history row."""
        with self._lock:
            with self._get_connection("reset", "robot_snapshots") as conn:
                conn.execute("DELETE FROM robot_snapshots")
                conn.execute("DELETE FROM robot_history")
                conn.commit()

        self.logger.info("Robot store reset")

    def close(self) -> None:
        if self._shared_conn is not None:
            self._shared_conn.close()
            self._shared_conn = None

    def _row_to_snapshot(self, row: sqlite3.Row) -> StoredSnapshot:
        """Convert database row to StoredSnapshot object."""
        is_placed = bool(row["is_placed"])
        position = None
        if is_placed and row["x"] is not None and row["y"] is not None:
            position = Position(int(row["x"]), int(row["y"]))

        return StoredSnapshot(
            id=row["id"],
            state=RobotState(
                position=position,
                direction=Direction(row["direction"] or Direction.NORTH.value),
                is_placed=position is not None,
            ),
            created_at=row["created_at"],
        )

    def _row_to_history_entry(self, row: sqlite3.Row) -> HistoryEntry:
        """Convert database row to HistoryEntry object."""
        return HistoryEntry(
            position=Position(int(row["x"]), int(row["y"])),
            direction=Direction(row["direction"]),
            action=Action(row["action"]),
            recorded_at=parse_timestamp(row["created_at"]),
        )
