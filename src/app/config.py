"""Модуль конфигурации приложения."""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tools.feature_parser import DEFAULT_FEATURE_PATTERNS
from tools.step_extractor import DEFAULT_BINDING_PATTERNS


ROOT_DIR = Path(__file__).resolve().parent.parent.parent
ENV_PATH = ROOT_DIR / ".env"

# Загружаем переменные только если файл существует, чтобы избежать лишних предупреждений
if ENV_PATH.exists():
    load_dotenv(ENV_PATH, override=False)


class Settings(BaseSettings):
    """Основные настройки приложения."""

    model_config = SettingsConfigDict(
        env_prefix="STEP_REPORT_",
        env_file=ENV_PATH,
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="step-report", description="Название сервиса")
    api_prefix: str = Field(default="/api/v1", description="Префикс для HTTP API")
    host: str = Field(default="127.0.0.1", description="Хост для запуска приложения")
    port: int = Field(default=8000, description="Порт для запуска приложения")
    log_level: str = Field(default="INFO", description="Уровень логирования")

    project_name: str | None = Field(
        default=None, description="Имя проекта в отчёте (по умолчанию имя каталога проекта)"
    )
    feature_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FEATURE_PATTERNS),
        description="Glob-паттерны feature-файлов относительно корня проекта",
    )
    binding_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BINDING_PATTERNS),
        description="Glob-паттерны исходников с определениями шагов",
    )
    show_bindings_without_instance: bool = Field(
        default=True, description="Показывать в отчёте определения без вхождений"
    )

    @field_validator("feature_patterns", "binding_patterns")
    @classmethod
    def require_patterns(cls, value: list[str], info: ValidationInfo) -> list[str]:
        patterns = [pattern.strip() for pattern in value if pattern and pattern.strip()]
        if not patterns:
            raise ValueError(f"{info.field_name} must contain at least one glob pattern")
        return patterns

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Получить настройки приложения с кешированием."""

    settings = Settings()
    logging.getLogger(__name__).debug("Config loaded: %s", settings.model_dump())
    return settings
