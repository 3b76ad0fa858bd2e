"""
SQLite persistence for accounts, courses, lessons and purchases.

Each call opens its own connection, enables foreign keys, commits on
success and closes. Uniqueness of account emails and of purchases per
``(user_id, course_id)`` is enforced by the schema; the inserting
methods use ``ON CONFLICT DO NOTHING`` and report a conflict by
returning ``None``.
"""
from __future__ import annotations
import datetime
import logging
import sqlite3
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional

from coursehub.core.models import Account, Course, Lesson, Purchase, Role

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS accounts (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    name TEXT NOT NULL,
    role TEXT NOT NULL CHECK (role IN ('STUDENT', 'INSTRUCTOR')),
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS courses (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT,
    price REAL,
    instructor_id TEXT NOT NULL REFERENCES accounts(id),
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS lessons (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    course_id TEXT NOT NULL REFERENCES courses(id) ON DELETE CASCADE,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS purchases (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL REFERENCES accounts(id),
    course_id TEXT NOT NULL REFERENCES courses(id) ON DELETE CASCADE,
    created_at TEXT NOT NULL,
    UNIQUE (user_id, course_id)
);

CREATE INDEX IF NOT EXISTS idx_lessons_course ON lessons(course_id);
CREATE INDEX IF NOT EXISTS idx_purchases_user ON purchases(user_id);
"""

# Columns a course update may touch
COURSE_UPDATABLE_COLUMNS = ("title", "description", "price")


def _now() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="milliseconds")


def _new_id() -> str:
    return str(uuid.uuid4())


def _account(row: sqlite3.Row) -> Account:
    return Account(
        id=row["id"],
        email=row["email"],
        password_hash=row["password_hash"],
        name=row["name"],
        role=Role(row["role"]),
        created_at=row["created_at"],
    )


def _course(row: sqlite3.Row, prefix: str = "") -> Course:
    return Course(
        id=row[f"{prefix}id"],
        title=row[f"{prefix}title"],
        description=row[f"{prefix}description"],
        price=row[f"{prefix}price"],
        instructor_id=row[f"{prefix}instructor_id"],
        created_at=row[f"{prefix}created_at"],
        updated_at=row[f"{prefix}updated_at"],
    )


def _lesson(row: sqlite3.Row) -> Lesson:
    return Lesson(
        id=row["id"],
        title=row["title"],
        content=row["content"],
        course_id=row["course_id"],
        created_at=row["created_at"],
    )


def _purchase(row: sqlite3.Row) -> Purchase:
    return Purchase(
        id=row["id"],
        user_id=row["user_id"],
        course_id=row["course_id"],
        created_at=row["created_at"],
    )


class Database:
    """Relational store reached through create/find/update/delete calls."""

    def __init__(self, path: str):
        self.path = path

    def connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor; commit on success and always close the connection."""
        conn = self.connect()
        try:
            yield conn.cursor()
            conn.commit()
        finally:
            conn.close()

    def init_schema(self) -> None:
        conn = self.connect()
        try:
            conn.executescript(SCHEMA)
            conn.commit()
        finally:
            conn.close()
        logger.info("Database schema ready at %s", self.path)

    def ping(self) -> bool:
        try:
            with self.cursor() as cur:
                cur.execute("SELECT 1")
            return True
        except sqlite3.Error as e:
            logger.error("Database ping failed: %s", e)
            return False

    # ─────────────────────────────────────────────────────────────────────
    # Accounts
    # ─────────────────────────────────────────────────────────────────────

    def create_account(self, email: str, password_hash: str, name: str, role: Role) -> Optional[Account]:
        """Insert an account. Returns None if the email is already taken."""
        account = Account(
            id=_new_id(),
            email=email,
            password_hash=password_hash,
            name=name,
            role=Role(role),
            created_at=_now(),
        )
        with self.cursor() as cur:
            cur.execute(
                "INSERT INTO accounts (id, email, password_hash, name, role, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?) ON CONFLICT(email) DO NOTHING",
                (account.id, account.email, account.password_hash, account.name,
                 account.role.value, account.created_at),
            )
            if cur.rowcount == 0:
                return None
        return account

    def get_account(self, account_id: str) -> Optional[Account]:
        with self.cursor() as cur:
            row = cur.execute("SELECT * FROM accounts WHERE id = ?", (account_id,)).fetchone()
        return _account(row) if row else None

    def get_account_by_email(self, email: str) -> Optional[Account]:
        with self.cursor() as cur:
            row = cur.execute("SELECT * FROM accounts WHERE email = ?", (email,)).fetchone()
        return _account(row) if row else None

    # ─────────────────────────────────────────────────────────────────────
    # Courses
    # ─────────────────────────────────────────────────────────────────────

    def create_course(
        self,
        instructor_id: str,
        title: str,
        description: Optional[str] = None,
        price: Optional[float] = None,
    ) -> Course:
        now = _now()
        course = Course(
            id=_new_id(),
            title=title,
            description=description,
            price=price,
            instructor_id=instructor_id,
            created_at=now,
            updated_at=now,
        )
        with self.cursor() as cur:
            cur.execute(
                "INSERT INTO courses (id, title, description, price, instructor_id, created_at, updated_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (course.id, course.title, course.description, course.price,
                 course.instructor_id, course.created_at, course.updated_at),
            )
        return course

    def list_courses(self) -> list[Course]:
        with self.cursor() as cur:
            rows = cur.execute("SELECT * FROM courses ORDER BY created_at, rowid").fetchall()
        return [_course(row) for row in rows]

    def get_course(self, course_id: str) -> Optional[Course]:
        with self.cursor() as cur:
            row = cur.execute("SELECT * FROM courses WHERE id = ?", (course_id,)).fetchone()
        return _course(row) if row else None

    def update_course(self, course_id: str, fields: dict) -> Optional[Course]:
        """Apply a partial update. Returns the updated course, or None if it is gone."""
        unknown = set(fields) - set(COURSE_UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update course columns: {', '.join(sorted(unknown))}")

        columns = [column for column in COURSE_UPDATABLE_COLUMNS if column in fields]
        assignments = ", ".join(f"{column} = ?" for column in columns + ["updated_at"])
        values = [fields[column] for column in columns] + [_now(), course_id]
        with self.cursor() as cur:
            cur.execute(f"UPDATE courses SET {assignments} WHERE id = ?", values)
            if cur.rowcount == 0:
                return None
            row = cur.execute("SELECT * FROM courses WHERE id = ?", (course_id,)).fetchone()
        return _course(row)

    def delete_course(self, course_id: str) -> bool:
        """Delete a course together with its lessons and purchases."""
        with self.cursor() as cur:
            cur.execute("DELETE FROM courses WHERE id = ?", (course_id,))
            return cur.rowcount > 0

    # ─────────────────────────────────────────────────────────────────────
    # Lessons
    # ─────────────────────────────────────────────────────────────────────

    def create_lesson(self, course_id: str, title: str, content: str) -> Lesson:
        lesson = Lesson(
            id=_new_id(),
            title=title,
            content=content,
            course_id=course_id,
            created_at=_now(),
        )
        with self.cursor() as cur:
            cur.execute(
                "INSERT INTO lessons (id, title, content, course_id, created_at) VALUES (?, ?, ?, ?, ?)",
                (lesson.id, lesson.title, lesson.content, lesson.course_id, lesson.created_at),
            )
        return lesson

    def list_lessons(self, course_id: str) -> list[Lesson]:
        with self.cursor() as cur:
            rows = cur.execute(
                "SELECT * FROM lessons WHERE course_id = ? ORDER BY created_at, rowid",
                (course_id,),
            ).fetchall()
        return [_lesson(row) for row in rows]

    # ─────────────────────────────────────────────────────────────────────
    # Purchases
    # ─────────────────────────────────────────────────────────────────────

    def create_purchase(self, user_id: str, course_id: str) -> Optional[Purchase]:
        """Insert a purchase unless one exists for the pair. Returns None on conflict."""
        purchase = Purchase(
            id=_new_id(),
            user_id=user_id,
            course_id=course_id,
            created_at=_now(),
        )
        with self.cursor() as cur:
            cur.execute(
                "INSERT INTO purchases (id, user_id, course_id, created_at) VALUES (?, ?, ?, ?) "
                "ON CONFLICT(user_id, course_id) DO NOTHING",
                (purchase.id, purchase.user_id, purchase.course_id, purchase.created_at),
            )
            if cur.rowcount == 0:
                return None
        return purchase

    def list_purchases(self, user_id: str) -> list[tuple[Purchase, Course]]:
        """Purchases of an account, each paired with its course."""
        with self.cursor() as cur:
            rows = cur.execute(
                "SELECT p.id, p.user_id, p.course_id, p.created_at, "
                "c.id AS c_id, c.title AS c_title, c.description AS c_description, "
                "c.price AS c_price, c.instructor_id AS c_instructor_id, "
                "c.created_at AS c_created_at, c.updated_at AS c_updated_at "
                "FROM purchases p JOIN courses c ON c.id = p.course_id "
                "WHERE p.user_id = ? ORDER BY p.created_at, p.rowid",
                (user_id,),
            ).fetchall()
        return [(_purchase(row), _course(row, prefix="c_")) for row in rows]
