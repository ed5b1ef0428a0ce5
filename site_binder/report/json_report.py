# site_binder/report/json_report.py

"""
Генерация JSON-выгрузки собранных страниц SiteBinder и обратная загрузка.
"""
import json
from pathlib import Path
from typing import Any, List, Sequence

from site_binder.crawler.models import PageResult
from site_binder.parser.extractor import NO_TITLE
from site_binder.parser.formatter import blocks_from_text


def render_json(results: Sequence[PageResult], output_path: Path | str) -> Path:
    """
    Сохраняет принятые страницы в формате JSON по указанному пути.

    :param results: список PageResult в порядке обхода
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = [r.to_dict() for r in results]

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output


def _page_from_dict(item: Any, heading_max_length: int) -> PageResult:
    if not isinstance(item, dict) or not isinstance(item.get('content', ''), str):
        raise ValueError(f"Expected an object with text 'content', got {type(item).__name__}")
    blocks = blocks_from_text(item.get('content', ''), heading_max_length)
    return PageResult(
        url=str(item.get('url') or ''),
        title=str(item.get('title') or NO_TITLE),
        blocks=tuple(blocks),
    )


def load_pages(input_path: Path | str, heading_max_length: int = 100) -> List[PageResult]:
    """
    Читает выгрузку :func:`render_json` (список) или ответ ``/api/scrape`` (объект)
    и восстанавливает блоки из текста ``content``.

    Блоки всегда строятся заново по тексту, поэтому порог
    *heading_max_length* определяет, какие строки станут заголовками.
    """
    with Path(input_path).open(encoding='utf-8') as f:
        data = json.load(f)
    items = data if isinstance(data, list) else [data]
    return [_page_from_dict(item, heading_max_length) for item in items]
