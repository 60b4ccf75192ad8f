"""Доменные модели и ошибки отчёта по определениям шагов."""
