# evercare/config/loader.py
"""
Загрузчик конфигурации проекта.
Единственный источник истины: config/config.json.
Секретные данные и адреса хостов переопределяются из переменных окружения.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


# =============================================================================
# ОПРЕДЕЛЕНИЕ ПУТЕЙ
# =============================================================================

def get_project_root() -> Path:
    """Возвращает корневую директорию проекта."""
    return Path(__file__).parent.parent.parent


def get_config_path() -> Path:
    """Возвращает путь к файлу конфигурации."""
    return get_project_root() / "config" / "config.json"


def load_config_json() -> dict[str, Any]:
    """Загружает config.json и возвращает словарь."""
    config_path = get_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Файл конфигурации не найден: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)


# =============================================================================
# PYDANTIC МОДЕЛИ КОНФИГУРАЦИИ
# =============================================================================

class SystemSettings(BaseModel):
    """Системные настройки."""
    PROJECT_NAME: str = "evercare"
    VERSION: str = "1.0.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"
    ENVIRONMENT: str = "development"
    COMPONENT_MODE: str = "all"


class DeploymentSettings(BaseModel):
    """Настройки развертывания микросервисов."""
    BOOKING_SERVICE_HOST: str = "booking_service"
    BOOKING_SERVICE_PORT: int = 5002
    JOBPOSTING_SERVICE_HOST: str = "jobposting_service"
    JOBPOSTING_SERVICE_PORT: int = 5003
    CHAT_SERVICE_HOST: str = "chat_service"
    CHAT_SERVICE_PORT: int = 5004
    REVIEW_SERVICE_HOST: str = "review_service"
    REVIEW_SERVICE_PORT: int = 5005
    PROFILE_SERVICE_HOST: str = "profile_service"
    PROFILE_SERVICE_PORT: int = 5001


class LoggingSettings(BaseModel):
    """Настройки логирования."""
    LOG_LEVEL: str = "DEBUG"
    LOG_TO_FILE: bool = True
    LOG_FILE_PATH: str = "logs/app.log"
    LOG_FORMAT: str = "colored"
    LOG_MAX_BYTES: int = 10485760
    LOG_BACKUP_COUNT: int = 5


class DatabaseSettings(BaseModel):
    """Настройки PostgreSQL."""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "evercare"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_MIN_POOL_SIZE: int = 5
    DB_MAX_POOL_SIZE: int = 20
    DB_COMMAND_TIMEOUT: int = 60
    DB_RETRY_ATTEMPTS: int = 3
    DB_RETRY_DELAY: float = 1.0

    @field_validator("DB_PASSWORD", mode="before")
    @classmethod
    def get_from_env(cls, v: str) -> str:
        """Получает пароль из переменных окружения."""
        if not v:
            return os.getenv("DB_PASSWORD", "")
        return v

    @property
    def dsn(self) -> str:
        """Возвращает DSN для подключения к PostgreSQL."""
        return (
            f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


class CorsSettings(BaseModel):
    """Настройки CORS для мобильного и веб-клиента."""
    ALLOWED_ORIGINS: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:8081",
            "http://localhost:19006",
            "http://localhost:3000",
        ]
    )
    ALLOW_CREDENTIALS: bool = True


class ChatSettings(BaseModel):
    """Настройки чата и realtime-слоя."""
    CHAT_ID_SEPARATOR: str = "_"
    SEND_QUEUE_SIZE: int = 256
    HISTORY_DEFAULT_LIMIT: int = 50
    HISTORY_MAX_LIMIT: int = 200

    @field_validator("SEND_QUEUE_SIZE", "HISTORY_DEFAULT_LIMIT", "HISTORY_MAX_LIMIT")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        """Размеры очередей и страниц должны быть положительными."""
        if v <= 0:
            raise ValueError("значение должно быть больше 0")
        return v


# =============================================================================
# ГЛАВНЫЙ КЛАСС НАСТРОЕК
# =============================================================================

class Settings(BaseSettings):
    """
    Главный класс настроек приложения.
    Агрегирует все секции конфигурации.
    """
    system: SystemSettings = Field(default_factory=SystemSettings)
    deployment: DeploymentSettings = Field(default_factory=DeploymentSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)
    chat: ChatSettings = Field(default_factory=ChatSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @classmethod
    def from_config_json(cls) -> "Settings":
        """
        Создаёт объект Settings из config.json.
        Секреты и хосты переопределяются из переменных окружения.
        """
        config_data = load_config_json()

        # Фильтруем комментарии (ключи, начинающиеся с _comment_)
        filtered_data = {k: v for k, v in config_data.items() if not k.startswith("_comment_")}

        return cls(
            system=SystemSettings(
                PROJECT_NAME=filtered_data.get("PROJECT_NAME", "evercare"),
                VERSION=filtered_data.get("VERSION", "1.0.0"),
                DEBUG=filtered_data.get("DEBUG", True),
                LOG_LEVEL=filtered_data.get("LOG_LEVEL", "DEBUG"),
                ENVIRONMENT=filtered_data.get("ENVIRONMENT", "development"),
                COMPONENT_MODE=os.getenv("COMPONENT_MODE", filtered_data.get("COMPONENT_MODE", "all")),
            ),
            deployment=DeploymentSettings(
                BOOKING_SERVICE_HOST=os.getenv("BOOKING_SERVICE_HOST", filtered_data.get("BOOKING_SERVICE_HOST", "booking_service")),
                BOOKING_SERVICE_PORT=int(os.getenv("BOOKING_SERVICE_PORT", filtered_data.get("BOOKING_SERVICE_PORT", 5002))),
                JOBPOSTING_SERVICE_HOST=os.getenv("JOBPOSTING_SERVICE_HOST", filtered_data.get("JOBPOSTING_SERVICE_HOST", "jobposting_service")),
                JOBPOSTING_SERVICE_PORT=int(os.getenv("JOBPOSTING_SERVICE_PORT", filtered_data.get("JOBPOSTING_SERVICE_PORT", 5003))),
                CHAT_SERVICE_HOST=os.getenv("CHAT_SERVICE_HOST", filtered_data.get("CHAT_SERVICE_HOST", "chat_service")),
                CHAT_SERVICE_PORT=int(os.getenv("CHAT_SERVICE_PORT", filtered_data.get("CHAT_SERVICE_PORT", 5004))),
                REVIEW_SERVICE_HOST=os.getenv("REVIEW_SERVICE_HOST", filtered_data.get("REVIEW_SERVICE_HOST", "review_service")),
                REVIEW_SERVICE_PORT=int(os.getenv("REVIEW_SERVICE_PORT", filtered_data.get("REVIEW_SERVICE_PORT", 5005))),
                PROFILE_SERVICE_HOST=os.getenv("PROFILE_SERVICE_HOST", filtered_data.get("PROFILE_SERVICE_HOST", "profile_service")),
                PROFILE_SERVICE_PORT=int(os.getenv("PROFILE_SERVICE_PORT", filtered_data.get("PROFILE_SERVICE_PORT", 5001))),
            ),
            logging=LoggingSettings(
                LOG_LEVEL=filtered_data.get("LOG_LEVEL", "DEBUG"),
                LOG_TO_FILE=filtered_data.get("LOG_TO_FILE", True),
                LOG_FILE_PATH=filtered_data.get("LOG_FILE_PATH", "logs/app.log"),
                LOG_FORMAT=filtered_data.get("LOG_FORMAT", "json"),
                LOG_MAX_BYTES=filtered_data.get("LOG_MAX_BYTES", 10485760),
                LOG_BACKUP_COUNT=filtered_data.get("LOG_BACKUP_COUNT", 5),
            ),
            database=DatabaseSettings(
                DB_HOST=os.getenv("DB_HOST", filtered_data.get("DB_HOST", "localhost")),
                DB_PORT=int(os.getenv("DB_PORT", filtered_data.get("DB_PORT", 5432))),
                DB_NAME=os.getenv("DB_NAME", filtered_data.get("DB_NAME", "evercare")),
                DB_USER=os.getenv("DB_USER", filtered_data.get("DB_USER", "postgres")),
                DB_PASSWORD=os.getenv("DB_PASSWORD", filtered_data.get("DB_PASSWORD", "")),
                DB_MIN_POOL_SIZE=filtered_data.get("DB_MIN_POOL_SIZE", 5),
                DB_MAX_POOL_SIZE=filtered_data.get("DB_MAX_POOL_SIZE", 20),
                DB_COMMAND_TIMEOUT=filtered_data.get("DB_COMMAND_TIMEOUT", 60),
                DB_RETRY_ATTEMPTS=filtered_data.get("DB_RETRY_ATTEMPTS", 3),
                DB_RETRY_DELAY=filtered_data.get("DB_RETRY_DELAY", 1.0),
            ),
            cors=CorsSettings(
                ALLOWED_ORIGINS=filtered_data.get(
                    "CORS_ALLOWED_ORIGINS",
                    ["http://localhost:8081", "http://localhost:19006", "http://localhost:3000"],
                ),
                ALLOW_CREDENTIALS=filtered_data.get("CORS_ALLOW_CREDENTIALS", True),
            ),
            chat=ChatSettings(
                CHAT_ID_SEPARATOR=filtered_data.get("CHAT_ID_SEPARATOR", "_"),
                SEND_QUEUE_SIZE=filtered_data.get("CHAT_SEND_QUEUE_SIZE", 256),
                HISTORY_DEFAULT_LIMIT=filtered_data.get("CHAT_HISTORY_DEFAULT_LIMIT", 50),
                HISTORY_MAX_LIMIT=filtered_data.get("CHAT_HISTORY_MAX_LIMIT", 200),
            ),
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Возвращает синглтон настроек приложения.
    Использует кэширование для производительности.
    """
    from dotenv import load_dotenv

    # Загружаем .env файл
    env_path = get_project_root() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return Settings.from_config_json()


# Экспорт синглтона для удобного импорта
settings = get_settings()
