import logging

from sqlalchemy import event, text
from sqlalchemy.engine import Connection, Engine
from sqlmodel import Session, SQLModel, create_engine

from gymlog.config import settings
from gymlog.models import DEFAULT_QUOTA, QUOTA_ID

logger = logging.getLogger(__name__)

# Columns added after the first release. Older databases get them patched in
# on startup; existing rows pick up the column default.
ADDITIVE_COLUMNS = [
    ("logs", "unit", "unit TEXT NOT NULL DEFAULT 'kg'"),
    ("nutrition_logs", "food_name", "food_name TEXT DEFAULT ''"),
]


def make_engine(url: str, **kwargs) -> Engine:
    engine = create_engine(url, connect_args={"check_same_thread": False}, **kwargs)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragmas(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        # Foreign keys are off by default in SQLite
        cursor.execute("PRAGMA foreign_keys = ON")
        # WAL for better read performance; in-memory databases ignore it
        cursor.execute("PRAGMA journal_mode = WAL")
        cursor.close()

    return engine


engine = make_engine(settings.database_url)


def _column_names(conn: Connection, table: str) -> set[str]:
    rows = conn.exec_driver_sql(f"PRAGMA table_info({table})").all()
    return {str(row[1]).lower() for row in rows}


def _ensure_column_exists(conn: Connection, table: str, column: str, ddl: str) -> None:
    if column.lower() in _column_names(conn, table):
        return
    logger.info("Adding missing column %s.%s", table, column)
    conn.exec_driver_sql(f"ALTER TABLE {table} ADD COLUMN {ddl}")


def init_database(bind: Engine | None = None) -> None:
    """Create tables and indexes if absent, patch older installs, seed the quota row.

    Safe to run on every startup.
    """
    bind = bind or engine
    SQLModel.metadata.create_all(bind)
    with bind.begin() as conn:
        for table, column, ddl in ADDITIVE_COLUMNS:
            _ensure_column_exists(conn, table, column, ddl)
        # create_all skips indexes of tables that already existed
        for table in SQLModel.metadata.sorted_tables:
            for index in table.indexes:
                index.create(conn, checkfirst=True)
        conn.execute(
            text(
                "INSERT OR IGNORE INTO nutrition_quota (id, calories, protein, carbs, fat) "
                "VALUES (:id, :calories, :protein, :carbs, :fat)"
            ),
            {"id": QUOTA_ID, **DEFAULT_QUOTA},
        )
    logger.debug("Database initialised at %s", bind.url)


def get_session():
    with Session(engine) as session:
        yield session
