"""
SQLite implementation of the task store.
"""
import os
import sqlite3
import threading
import logging
from datetime import datetime
from typing import Optional, List, Callable, Any, Tuple

from taskmind.models import Task, TaskStatus, TaskPriority
from .interface import TaskStore

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"

_PRIORITY_ORDER_SQL = (
    "CASE priority WHEN 'URGENT' THEN 4 WHEN 'HIGH' THEN 3 "
    "WHEN 'MEDIUM' THEN 2 WHEN 'LOW' THEN 1 ELSE 0 END"
)


def _py_lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if value is not None else None


def _escape_like(keyword: str) -> str:
    return keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLiteTaskStore(TaskStore):
    """SQLite-based task store.

    File databases open a connection per operation. An in-memory database
    keeps one shared connection guarded by a lock, since every new
    connection to ``:memory:`` would see an empty database.
    """

    def __init__(self, db_path: str, clock: Callable[[], datetime] = datetime.now):
        """
        Initialize the store and create the schema if needed.

        Args:
            db_path: Path to the SQLite file, or ':memory:'
            clock: Source of createdAt timestamps
        """
        self.db_path = db_path
        self._clock = clock
        self._lock = threading.Lock()
        self._shared_conn: Optional[sqlite3.Connection] = None
        if db_path == MEMORY_DB:
            self._shared_conn = self._connect()
        else:
            self._ensure_db_directory()
        self._init_schema()

    def _ensure_db_directory(self):
        """Ensure database directory exists."""
        db_dir = os.path.dirname(os.path.abspath(self.db_path))
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        # SQLite LOWER() only folds ASCII
        conn.create_function("py_lower", 1, _py_lower, deterministic=True)
        return conn

    def _execute(self, query: str, params: Tuple = (), fetch: bool = False, write: bool = False) -> Any:
        """Run one statement and return fetched rows or the cursor's lastrowid."""
        with self._lock:
            conn = self._shared_conn or self._connect()
            try:
                cursor = conn.cursor()
                cursor.execute(query, params)
                if write:
                    conn.commit()
                if fetch:
                    return cursor.fetchall()
                return cursor.lastrowid
            finally:
                if conn is not self._shared_conn:
                    conn.close()

    def _init_schema(self):
        self._execute("""
            CREATE TABLE IF NOT EXISTS tasks (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                description TEXT,
                status TEXT NOT NULL DEFAULT 'TODO',
                priority TEXT NOT NULL DEFAULT 'MEDIUM',
                due_date TEXT,
                tags TEXT,
                created_at TEXT NOT NULL
            )
        """, write=True)

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            status=TaskStatus(row["status"]),
            priority=TaskPriority(row["priority"]),
            due_date=datetime.fromisoformat(row["due_date"]) if row["due_date"] else None,
            tags=row["tags"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def _select(self, where: str = "", params: Tuple = (), order_by: str = "id ASC") -> List[Task]:
        query = "SELECT * FROM tasks"
        if where:
            query += f" WHERE {where}"
        query += f" ORDER BY {order_by}"
        rows = self._execute(query, params, fetch=True)
        return [self._row_to_task(row) for row in rows]

    def create(
        self,
        title: str,
        description: Optional[str] = None,
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: Optional[datetime] = None,
        tags: Optional[str] = None,
    ) -> Task:
        created_at = self._clock()
        task_id = self._execute(
            """
            INSERT INTO tasks (title, description, status, priority, due_date, tags, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                title,
                description,
                TaskStatus(status).value,
                TaskPriority(priority).value,
                due_date.isoformat() if due_date else None,
                tags,
                created_at.isoformat(),
            ),
            write=True,
        )
        logger.info(f"Created task {task_id}: {title}")
        return self.find_by_id(task_id)

    def save(self, task: Task) -> Task:
        self._execute(
            """
            UPDATE tasks
            SET title = ?, description = ?, status = ?, priority = ?, due_date = ?, tags = ?
            WHERE id = ?
            """,
            (
                task.title,
                task.description,
                task.status.value,
                task.priority.value,
                task.due_date.isoformat() if task.due_date else None,
                task.tags,
                task.id,
            ),
            write=True,
        )
        return self.find_by_id(task.id)

    def find_by_id(self, task_id: int) -> Optional[Task]:
        tasks = self._select("id = ?", (task_id,))
        return tasks[0] if tasks else None

    def find_all(self) -> List[Task]:
        return self._select()

    def find_by_status(self, status: TaskStatus) -> List[Task]:
        return self._select("status = ?", (TaskStatus(status).value,))

    def find_by_priority(self, priority: TaskPriority) -> List[Task]:
        return self._select("priority = ?", (TaskPriority(priority).value,))

    def find_by_order_by_priority_desc_created_at_desc(self) -> List[Task]:
        return self._select(order_by=f"{_PRIORITY_ORDER_SQL} DESC, created_at DESC, id DESC")

    def search_by_keyword(self, keyword: str) -> List[Task]:
        pattern = f"%{_escape_like(keyword.lower())}%"
        return self._select(
            "py_lower(title) LIKE ? ESCAPE '\\' "
            "OR py_lower(description) LIKE ? ESCAPE '\\' "
            "OR py_lower(tags) LIKE ? ESCAPE '\\'",
            (pattern, pattern, pattern),
        )

    def exists_by_id(self, task_id: int) -> bool:
        rows = self._execute("SELECT 1 FROM tasks WHERE id = ?", (task_id,), fetch=True)
        return bool(rows)

    def delete_by_id(self, task_id: int) -> None:
        self._execute("DELETE FROM tasks WHERE id = ?", (task_id,), write=True)
        logger.info(f"Deleted task {task_id}")

    def ping(self) -> bool:
        """Check that the database answers a trivial query."""
        try:
            self._execute("SELECT 1", fetch=True)
            return True
        except sqlite3.Error:
            logger.error("Database health check failed", exc_info=True)
            return False
