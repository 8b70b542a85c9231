"""Подключение к базе данных"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from config import settings

connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db():
    """Создает таблицы"""
    from . import models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def get_db():
    """Сессия БД для зависимостей FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
