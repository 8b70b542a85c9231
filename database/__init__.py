"""База данных"""
from .database import Base, SessionLocal, get_db, init_db
from .models import DivinationRecord

__all__ = ['Base', 'SessionLocal', 'get_db', 'init_db', 'DivinationRecord']
