"""
Модуль для загрузки и валидации конфигурации краулера SiteCrawler.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError

__all__ = ["CrawlerConfig", "load_config", "validate_seed_url", "DEFAULT_CONFIG_PATH"]


class CrawlerConfig(BaseModel):
    """Конфигурация одного запуска обхода сайта."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    # Завершающий слеш не срезается: seed задаёт префикс области обхода.
    seed_url: HttpUrl = Field(..., description="Стартовый URL и префикс области обхода.")
    output_path: Path = Field(Path("urls.csv"), description="Файл со списком найденных URL.")
    concurrency: Optional[int] = Field(
        None, ge=1, description="Лимит одновременных запросов (None — без ограничения)."
    )
    strict_scope: bool = Field(
        False, description="Сравнивать схему, хост и сегменты пути вместо строкового префикса."
    )
    timeout: Optional[float] = Field(
        None, gt=0, description="Таймаут на один запрос, секунд (None — значение aiohttp)."
    )
    user_agent: Optional[str] = Field(
        None, min_length=1, description="Заголовок User-Agent (None — значение aiohttp)."
    )


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")
_SEED_URL = TypeAdapter(HttpUrl)


def validate_seed_url(url: str) -> str:
    """Проверяет стартовый URL так же, как поле seed_url (только http/https)."""
    return str(_SEED_URL.validate_python(url))


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(DEFAULT_CONFIG_PATH))
        path_obj = DEFAULT_CONFIG_PATH
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    try:
        return CrawlerConfig(**data)
    except ValidationError:
        raise
