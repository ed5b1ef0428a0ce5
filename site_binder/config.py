"""
Модуль для загрузки и валидации конфигурации SiteBinder.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator
from reportlab.lib.pagesizes import A4, LEGAL, LETTER
from reportlab.lib.units import mm

from site_binder.report.paginator import Margins

__all__ = ["LayoutConfig", "CrawlerConfig", "load_config", "DEFAULT_USER_AGENT"]

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; SiteBinder/1.0)"

_PAGE_SIZES = {"A4": A4, "LETTER": LETTER, "LEGAL": LEGAL}


class LayoutConfig(BaseModel):
    """Геометрия страниц итогового PDF (поля в миллиметрах)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    page_size: Literal["A4", "LETTER", "LEGAL"] = "A4"
    margin_top: float = Field(20.0, ge=0)
    margin_right: float = Field(20.0, ge=0)
    margin_bottom: float = Field(20.0, ge=0)
    margin_left: float = Field(20.0, ge=0)

    @field_validator("page_size", mode="before")
    def _upper_page_size(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v

    def page_dimensions(self) -> Tuple[float, float]:
        """Ширина и высота страницы в пунктах PDF."""
        width, height = _PAGE_SIZES[self.page_size]
        return float(width), float(height)

    def margins(self) -> Margins:
        """Поля страницы в пунктах PDF."""
        return Margins(
            top=self.margin_top * mm,
            right=self.margin_right * mm,
            bottom=self.margin_bottom * mm,
            left=self.margin_left * mm,
        )


class CrawlerConfig(BaseModel):
    """Конфигурация одного запуска обхода и сборки документа."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: Optional[HttpUrl] = Field(None, description="Стартовый URL обхода.")
    max_pages: int = Field(5, ge=1, description="Лимит принятых страниц.")
    delay: float = Field(0.5, ge=0, description="Пауза вежливости между запросами (секунд).")
    timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    min_content_length: int = Field(
        50, ge=0, description="Страница принимается, если длина текста строго больше."
    )
    heading_max_length: int = Field(
        100, ge=1, description="Порог длины для распознавания заголовка по тексту."
    )
    output_name: str = Field("scraped-doc", min_length=1, description="Имя итогового PDF.")
    layout: LayoutConfig = Field(default_factory=LayoutConfig)

    def with_overrides(self, **overrides: Any) -> CrawlerConfig:
        """Возвращает копию с подменёнными полями (None-значения игнорируются)."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return CrawlerConfig(**data)


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top-level YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top-level JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
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
        raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlerConfig(**data)
