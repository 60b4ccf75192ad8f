"""Конфигурация, логирование и точки входа приложения."""
