"""
Генератор PDF с раскладкой этикеток
"""
import logging
from pathlib import Path
from typing import Union

from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from . import config
from .exceptions import RenderError
from .models import BorderShowMode, CellKind, Item, LayoutResult, Page, PrintSettings
from .rendering import Box, iter_cell_boxes, page_area, split_content

logger = logging.getLogger(__name__)


class PDFGenerator:
    def __init__(self, text_size: float = config.DEFAULT_TEXT_SIZE, font_name: str = "Helvetica"):
        self.text_size = text_size
        self.font_name = font_name
        self.line_width = 0.25

    def generate_pdf(self, result: LayoutResult, output_path: Union[str, Path]) -> dict:
        """Сгенерировать многостраничный PDF файл"""
        if not result.pages:
            raise RenderError("Нет страниц для генерации PDF")

        output_path = Path(output_path)
        logger.info(f"Начало создания PDF: {output_path}")
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            first = result.pages[0]
            c = canvas.Canvas(str(output_path), pagesize=(first.width * mm, first.height * mm))
            c.setTitle("Label sheets")

            for page in result.pages:
                if page.index > 0:
                    c.showPage()
                self._draw_page(c, page, result.settings)

            c.save()
        except Exception as e:
            logger.error(f"Ошибка при создании PDF: {e}")
            raise RenderError(f"Ошибка при создании PDF: {e}") from e

        logger.info(f"PDF успешно создан: {output_path}")
        return {
            'total_pages': result.page_count,
            'total_items': len(result.item_cells()),
            'output_path': str(output_path),
        }

    def _rect(self, c: canvas.Canvas, page: Page, box: Box, **kwargs):
        # reportlab считает от левого нижнего угла
        c.rect(box.x * mm, (page.height - box.y - box.height) * mm,
               box.width * mm, box.height * mm, **kwargs)

    def _draw_page(self, c: canvas.Canvas, page: Page, settings: PrintSettings):
        c.setPageSize((page.width * mm, page.height * mm))
        c.setStrokeColorRGB(0, 0, 0)
        c.setLineWidth(self.line_width)

        area = page_area(page, settings)
        if settings.border_show_mode != BorderShowMode.NONE and area is not None:
            self._rect(c, page, area, stroke=1, fill=0)

        for cell, outer, content in iter_cell_boxes(page, settings):
            if cell.border_show_mode == BorderShowMode.GRID:
                self._rect(c, page, outer, stroke=1, fill=0)
            if cell.kind == CellKind.ITEM and content.width > 0 and content.height > 0:
                self._draw_item(c, page, cell.item, content)

    def _draw_item(self, c: canvas.Canvas, page: Page, item: Item, content: Box):
        visual_box, caption_box = split_content(content, bool(item.caption))

        c.saveState()
        path = c.beginPath()
        path.rect(content.x * mm, (page.height - content.y - content.height) * mm,
                  content.width * mm, content.height * mm)
        c.clipPath(path, stroke=0, fill=0)

        if item.visual is not None and visual_box.width > 0:
            c.drawImage(ImageReader(item.visual),
                        visual_box.x * mm, (page.height - visual_box.y - visual_box.height) * mm,
                        width=visual_box.width * mm, height=visual_box.height * mm,
                        preserveAspectRatio=True, mask='auto')

        if caption_box is not None and caption_box.width > 0:
            self._draw_caption(c, page, item.caption, caption_box)

        c.restoreState()

    def _draw_caption(self, c: canvas.Canvas, page: Page, text: str, box: Box):
        font_size = self.text_size * mm
        c.setFont(self.font_name, font_size)
        c.setFillColorRGB(0, 0, 0)

        lines = simpleSplit(text, self.font_name, font_size, box.width * mm)
        top = (page.height - box.y) * mm
        for line_idx, line in enumerate(lines):
            baseline = top - font_size * (line_idx + 1)
            if baseline < (page.height - box.y - box.height) * mm:
                break
            c.drawString(box.x * mm, baseline, line)
