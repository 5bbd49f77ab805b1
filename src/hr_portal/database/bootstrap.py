"""Schema and demo-data setup, used by ``AUTO_INIT_DB``/``AUTO_SEED_DB`` and scripts/."""

from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator, Mapping, Optional

from werkzeug.security import generate_password_hash

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

DEMO_ACCOUNTS = (
    # name, email, password, employee code, role
    ("Admin Demo", "admin@hr.local", "admin123", "EMP-0001", "admin"),
    ("Employee Demo", "employee@hr.local", "employee123", "EMP-0002", "employee"),
)

# Quoted strings and comments are matched whole so a ';' inside them never splits.
_SQL_TOKEN = re.compile(
    r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|--[^\n]*|;|[^'";-]+|-""",
    re.DOTALL,
)
_DB_SELECTION = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")


def split_sql(sql: str) -> Iterator[str]:
    """Yield the statements of a schema/seed script; the target DB comes from config."""

    buf: list[str] = []
    for token in _SQL_TOKEN.findall(_DB_SELECTION.sub("", sql)):
        if token.startswith("--"):
            continue
        if token == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(token)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _factory(db_config: Mapping) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_mapping(db_config))


def _run_script(db_config: Mapping, path: str | Path) -> int:
    statements = list(split_sql(Path(path).read_text(encoding="utf-8")))
    with closing(_factory(db_config).connect()) as conn:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    return len(statements)


def ensure_database_exists(db_config: Mapping) -> None:
    factory = _factory(db_config)
    with closing(factory.connect(with_database=False)) as conn:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: Mapping, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_script(db_config, schema_path)
    logger.info("Applied %s (%s statements)", schema_path, count)


def apply_seed_sql(db_config: Mapping, *, seed_path: str | Path) -> None:
    count = _run_script(db_config, seed_path)
    logger.info("Applied %s (%s statements)", seed_path, count)


def ensure_demo_users(db_config: Mapping) -> None:
    """Create (or reset) the demo login accounts and their employee records."""

    with closing(_factory(db_config).connect()) as conn:
        cur = conn.cursor(dictionary=True)

        def lookup(table: str, id_col: str, name: str) -> Optional[int]:
            cur.execute(f"SELECT {id_col} AS id FROM {table} WHERE name=%s", (name,))
            row = cur.fetchone()
            return int(row["id"]) if row else None

        department_id = lookup("departments", "department_id", "Human Resources")
        position_id = lookup("positions", "position_id", "HR Officer")

        for name, email, password, code, role in DEMO_ACCOUNTS:
            cur.execute(
                """
                INSERT INTO users (name, email, password_hash, is_active)
                VALUES (%s, %s, %s, 1)
                ON DUPLICATE KEY UPDATE name=VALUES(name), password_hash=VALUES(password_hash), is_active=1
                """,
                (name, email, generate_password_hash(password)),
            )
            cur.execute(
                """
                INSERT INTO employees (employee_code, full_name, email, role, department_id, position_id)
                VALUES (%s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE full_name=VALUES(full_name), email=VALUES(email), role=VALUES(role)
                """,
                (code, name, email, role, department_id, position_id),
            )

        conn.commit()
    logger.info("Demo accounts ready: %s", ", ".join(a[1] for a in DEMO_ACCOUNTS))


def list_tables(db_config: Mapping) -> list[str]:
    with closing(_factory(db_config).connect()) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
