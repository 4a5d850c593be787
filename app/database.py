import logging

from sqlalchemy import create_engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
from app.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# 建立資料庫引擎（根據資料庫類型設定不同參數）
connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args = {"check_same_thread": False}  # SQLite 需要這個設定

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.sql_echo,
    pool_pre_ping=True  # 自動檢查連線是否有效
)

# 建立 Session 工廠
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 建立 Base 類別
Base = declarative_base()

# 班表範本每日設定的分段班欄位（舊資料表可能缺少）
SPLIT_SCHEDULE_COLUMNS = {
    "is_split_schedule": "BOOLEAN NOT NULL DEFAULT FALSE",
    "morning_start": "TIME",
    "morning_end": "TIME",
    "afternoon_start": "TIME",
    "afternoon_end": "TIME",
}

# 分段班時為 NULL 的一般班欄位
NULLABLE_TIME_COLUMNS = ("start_time", "end_time")


def get_db():
    """取得資料庫 Session（依賴注入用）"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """初始化資料庫（建立所有表）"""
    from app.models import (  # noqa: F401
        employee, schedule_template, weekly_schedule, schedule, daily_schedule_exception
    )
    bind = bind or engine
    # checkfirst=True: 如果表已存在就跳過，避免多 worker 競爭問題
    Base.metadata.create_all(bind=bind, checkfirst=True)
    # 執行資料庫遷移（加入缺少的欄位）
    run_migrations(bind)


def run_migrations(bind=None) -> list[str]:
    """
    執行資料庫遷移

    1. 加入缺少的分段班欄位
    2. 分段班的 start_time / end_time 為 NULL，舊資料表的 NOT NULL 需移除

    Returns:
        實際加入的欄位名稱
    """
    from sqlalchemy import text, inspect

    bind = bind or engine
    added = []

    inspector = inspect(bind)
    if "schedule_template_days" not in inspector.get_table_names():
        return added

    columns = [col["name"] for col in inspector.get_columns("schedule_template_days")]

    with bind.begin() as conn:  # bind 為 Engine
        for name, ddl in SPLIT_SCHEDULE_COLUMNS.items():
            if name in columns:
                continue
            conn.execute(text(f"ALTER TABLE schedule_template_days ADD COLUMN {name} {ddl}"))
            added.append(name)
            logger.info("Migration: added '%s' column to schedule_template_days table", name)

    _drop_time_not_null(bind)
    return added


def _drop_time_not_null(bind) -> list[str]:
    """舊資料表的 start_time / end_time 改為可為 NULL，回傳有變更的欄位"""
    from sqlalchemy import text, inspect

    columns = {col["name"]: col for col in inspect(bind).get_columns("schedule_template_days")}
    strict = [
        name for name in NULLABLE_TIME_COLUMNS
        if name in columns and not columns[name]["nullable"]
    ]
    if not strict:
        return strict

    with bind.begin() as conn:
        if bind.dialect.name == "sqlite":
            # SQLite 不支援 ALTER COLUMN，只能重建資料表
            _rebuild_sqlite_template_days(conn, set(columns))
        else:
            for name in strict:
                conn.execute(text(f"ALTER TABLE schedule_template_days ALTER COLUMN {name} DROP NOT NULL"))

    for name in strict:
        logger.info("Migration: '%s' column of schedule_template_days is now nullable", name)
    return strict


def _rebuild_sqlite_template_days(conn, existing_columns: set[str]) -> None:
    """依目前的 model 重建 schedule_template_days，保留原有資料"""
    from sqlalchemy import MetaData, text, inspect
    from app.models.schedule_template import ScheduleTemplate, ScheduleTemplateDay

    # 舊表的索引名稱會與新表衝突，先移除
    for index in inspect(conn).get_indexes("schedule_template_days"):
        conn.execute(text(f'DROP INDEX IF EXISTS "{index["name"]}"'))

    metadata = MetaData()
    ScheduleTemplate.__table__.to_metadata(metadata)  # 外鍵參照需要
    new_table = ScheduleTemplateDay.__table__.to_metadata(metadata, name="schedule_template_days_new")
    new_table.create(conn)

    names = ", ".join(c.name for c in new_table.columns if c.name in existing_columns)
    conn.execute(text(
        f"INSERT INTO schedule_template_days_new ({names}) SELECT {names} FROM schedule_template_days"
    ))
    conn.execute(text("DROP TABLE schedule_template_days"))
    conn.execute(text("ALTER TABLE schedule_template_days_new RENAME TO schedule_template_days"))
