"""Файловая система проекта и сохранение отчётов."""
