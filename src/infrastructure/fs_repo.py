"""Абстракция работы с файловой системой тестового проекта.

FsRepository даёт извлекателю определений шагов и загрузчику feature-файлов
единый способ искать и читать файлы. Пути возвращаются относительно корня
проекта, чтобы отчёт не зависел от того, где проект лежит на диске.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class FsRepository:
    """Работа с файловой системой репозитория проекта."""

    def __init__(self, root_path: str) -> None:
        self._root = Path(root_path).expanduser().resolve()

    def get_root_path(self) -> str:
        """Возвращает абсолютный путь к корню проекта."""

        return str(self._root)

    def iter_source_files(self, patterns: list[str]) -> Iterable[str]:
        """Итерирует по файлам, соответствующим заданным glob-паттернам.

        Внутри одного паттерна файлы отсортированы, чтобы порядок каталога
        определений и feature-файлов был воспроизводимым между запусками.

        Args:
            patterns: Список glob-паттернов (например, ["**/*Steps.cs", "**/*.feature"]).

        Yields:
            Относительные POSIX-пути файлов, подходящих под паттерны.
        """

        seen: set[Path] = set()
        for pattern in patterns:
            for path in sorted(self._root.glob(pattern)):
                if not path.is_file():
                    continue
                rel_path = path.relative_to(self._root)
                if rel_path not in seen:
                    seen.add(rel_path)
                    yield rel_path.as_posix()

    def read_text_file(self, relative_path: str) -> str:
        """Читает текстовый файл, BOM в начале файла отбрасывается."""

        file_path = self._root / relative_path
        return file_path.read_text(encoding="utf-8-sig")

