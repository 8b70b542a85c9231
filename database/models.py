"""Модели базы данных"""
from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from sqlalchemy.sql import func
from .database import Base


class DivinationRecord(Base):
    """История гаданий"""
    __tablename__ = "divination_records"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, index=True, nullable=True)
    
    # Вопрос
    question = Column(Text, nullable=False)
    category = Column(String, nullable=False)
    urgency = Column(String, nullable=False)
    
    # Способ гадания: 'time' или 'coins'
    method = Column(String, nullable=False)
    coin_results = Column(JSON, nullable=True)
    
    title = Column(String, nullable=False)
    summary = Column(Text, nullable=False)
    
    # Результаты расчета (JSON)
    result_data = Column(JSON, nullable=False)
    ai_analysis = Column(Text, nullable=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now())
