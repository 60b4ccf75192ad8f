"""Сопоставление шагов, материализация шаблонов и сборка отчёта."""
