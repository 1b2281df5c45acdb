"""
Общая геометрия для отрисовки страниц (PDF и предпросмотр)
"""
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .models import Cell, Page, PrintSettings


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float


def page_area(page: Page, settings: PrintSettings) -> Optional[Box]:
    """Рабочая область листа внутри полей; None если поля съели весь лист"""
    margin = settings.margin
    width = page.width - margin.left - margin.right
    height = page.height - margin.top - margin.bottom
    if width <= 0 or height <= 0:
        return None
    return Box(margin.left, margin.top, width, height)


def iter_cell_boxes(page: Page, settings: PrintSettings) -> Iterator[Tuple[Cell, Box, Box]]:
    """
    Координаты ячеек в мм от левого верхнего угла листа.

    Ячейки расставляются как в таблице с border-spacing: интервал стоит перед
    первой ячейкой и между ячейками, отступ принтера увеличивает внешний
    размер ячейки. Возвращает (ячейка, внешняя рамка, область содержимого).
    """
    spacing = settings.spacing
    y = settings.margin.top + spacing.vertical
    for row in page.grid:
        x = settings.margin.left + spacing.horizontal
        row_height = max(cell.outer_height for cell in row)
        for cell in row:
            outer = Box(x, y, cell.outer_width, cell.outer_height)
            content = Box(x + cell.padding.left, y + cell.padding.top, cell.width, cell.height)
            yield cell, outer, content
            x += cell.outer_width + spacing.horizontal
        y += row_height + spacing.vertical


def split_content(content: Box, has_caption: bool) -> Tuple[Box, Optional[Box]]:
    """Квадрат под изображение и остаток под подпись"""
    max_width = content.width / 2 if has_caption else content.width
    side = max(0.0, min(max_width, content.height))
    if not has_caption:
        visual = Box(content.x + (content.width - side) / 2, content.y + (content.height - side) / 2,
                     side, side)
        return visual, None
    visual = Box(content.x, content.y + (content.height - side) / 2, side, side)
    caption = Box(content.x + side, content.y, max(0.0, content.width - side), content.height)
    return visual, caption
