# -*- coding: utf-8 -*-
# label_sheets/preview.py
import logging
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image, ImageDraw, ImageFont

from . import config
from .exceptions import RenderError
from .models import BorderShowMode, CellKind, LayoutResult, Page, PrintSettings
from .rendering import Box, iter_cell_boxes, page_area, split_content

logger = logging.getLogger(__name__)


def _load_font(font_path: Optional[str], size: int):
    if font_path:
        try:
            return ImageFont.truetype(font_path, size)
        except OSError:
            logger.warning(f"Не удалось загрузить шрифт {font_path}, используется стандартный")

    try:
        return ImageFont.truetype("DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default()


class PreviewRenderer:
    """Растровый предпросмотр страниц раскладки"""

    def __init__(self, dpi: int = config.PREVIEW_DPI, text_size: float = config.DEFAULT_TEXT_SIZE,
                 font_path: Optional[str] = None):
        self.dpi = dpi
        self.text_size = text_size
        self.font_path = font_path

    def _px(self, value_mm: float, scale: float) -> int:
        return int(round(value_mm * self.dpi / config.MM_PER_INCH * scale))

    def _box_px(self, box: Box, scale: float):
        x0, y0 = self._px(box.x, scale), self._px(box.y, scale)
        return x0, y0, x0 + self._px(box.width, scale), y0 + self._px(box.height, scale)

    def render_page(self, page: Page, settings: PrintSettings,
                    scale: float = config.DEFAULT_PREVIEW_SCALE) -> Image.Image:
        if scale <= 0:
            raise RenderError(f"Масштаб предпросмотра должен быть больше 0: {scale}")

        size = (max(1, self._px(page.width, scale)), max(1, self._px(page.height, scale)))
        sheet = Image.new("RGB", size, (255, 255, 255))
        draw = ImageDraw.Draw(sheet)
        font = _load_font(self.font_path, max(1, self._px(self.text_size, scale)))

        area = page_area(page, settings)
        if settings.border_show_mode != BorderShowMode.NONE and area is not None:
            draw.rectangle(self._box_px(area, scale), outline=(0, 0, 0))

        for cell, outer, content in iter_cell_boxes(page, settings):
            if cell.border_show_mode == BorderShowMode.GRID:
                draw.rectangle(self._box_px(outer, scale), outline=(0, 0, 0))
            if cell.kind != CellKind.ITEM or content.width <= 0 or content.height <= 0:
                continue

            visual_box, caption_box = split_content(content, bool(cell.item.caption))
            x0, y0, x1, y1 = self._box_px(visual_box, scale)
            if cell.item.visual is not None and x1 > x0 and y1 > y0:
                visual = cell.item.visual.convert("RGB").resize((x1 - x0, y1 - y0), Image.Resampling.NEAREST)
                sheet.paste(visual, (x0, y0))
            if caption_box is not None and caption_box.width > 0:
                draw.text((self._px(caption_box.x, scale), self._px(caption_box.y, scale)),
                          cell.item.caption, fill=(0, 0, 0), font=font)

        return sheet

    def render_all(self, result: LayoutResult,
                   scale: float = config.DEFAULT_PREVIEW_SCALE) -> List[Image.Image]:
        return [self.render_page(page, result.settings, scale) for page in result.pages]

    def save_previews(self, result: LayoutResult, output_dir: Union[str, Path],
                      scale: float = config.DEFAULT_PREVIEW_SCALE) -> List[Path]:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        paths = []
        for page, image in zip(result.pages, self.render_all(result, scale)):
            path = output_dir / f"page_{page.index + 1:03d}.png"
            try:
                image.save(path, 'PNG')
            except OSError as e:
                logger.error(f"Ошибка сохранения предпросмотра {path}: {e}")
                raise RenderError(f"Ошибка сохранения предпросмотра {path}: {e}") from e
            paths.append(path)

        logger.info(f"Предпросмотр сохранён: {len(paths)} стр. в {output_dir}")
        return paths
