"""Конфигурация приложения"""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Настройки приложения"""
    
    # Database
    database_url: str = "sqlite:///./bugua.db"
    
    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    
    # Application
    debug: bool = False
    log_level: str = "INFO"
    
    # AI-толкование (OpenAI-совместимый API, по умолчанию DeepSeek)
    deepseek_api_key: Optional[str] = None
    deepseek_base_url: str = "https://api.deepseek.com"
    deepseek_model: str = "deepseek-chat"
    ai_temperature: float = 0.7
    ai_max_tokens: int = 1500
    ai_timeout: int = 60
    
    @property
    def ai_enabled(self) -> bool:
        """Проверяет, настроен ли ключ для AI-толкования"""
        return bool(self.deepseek_api_key)
    
    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
