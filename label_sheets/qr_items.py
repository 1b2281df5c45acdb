# -*- coding: utf-8 -*-
# label_sheets/qr_items.py
import logging
from typing import Iterable, List, Optional

import qrcode
from PIL import Image

from . import config
from .exceptions import ConfigurationError
from .models import Item, QRCodeData, QRCodePrintSettings

logger = logging.getLogger(__name__)

ERROR_CORRECTION = {
    'L': qrcode.constants.ERROR_CORRECT_L,
    'M': qrcode.constants.ERROR_CORRECT_M,
    'Q': qrcode.constants.ERROR_CORRECT_Q,
    'H': qrcode.constants.ERROR_CORRECT_H,
}

# Доля стороны кода, занимаемая иконкой
ICON_FRACTION = 0.22


def make_qr_image(value: str, error_level: str = config.DEFAULT_ERROR_LEVEL,
                  icon: Optional[Image.Image] = None) -> Image.Image:
    """Сгенерировать квадратное изображение QR-кода"""
    if error_level not in ERROR_CORRECTION:
        raise ConfigurationError(
            f"Неизвестный уровень коррекции: {error_level!r}, допустимо {', '.join(config.ERROR_LEVELS)}")

    qr = qrcode.QRCode(
        error_correction=ERROR_CORRECTION[error_level],
        border=1,
    )
    qr.add_data(value)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white").convert("RGB")

    if icon is not None:
        side = max(1, int(img.width * ICON_FRACTION))
        badge = icon.convert("RGBA")
        badge.thumbnail((side, side), Image.Resampling.LANCZOS)
        offset = ((img.width - badge.width) // 2, (img.height - badge.height) // 2)
        img.paste(badge, offset, badge)

    return img


def load_icon(icon_path: Optional[str]) -> Optional[Image.Image]:
    if not icon_path:
        return None
    with Image.open(icon_path) as icon:
        icon.load()
        return icon.copy()


def make_qr_item(data: QRCodeData, settings: QRCodePrintSettings,
                 icon: Optional[Image.Image] = None) -> Item:
    visual = make_qr_image(data.value, data.error_level, icon if settings.show_icon else None)
    caption = (data.label if data.label is not None else data.value) if settings.show_content else None
    return Item(visual=visual, caption=caption, key=data.value)


def make_qr_items(records: Iterable[QRCodeData], settings: QRCodePrintSettings) -> List[Item]:
    """Преобразовать записи в элементы печати, сохраняя порядок"""
    icon = load_icon(settings.icon_path) if settings.show_icon else None
    items = [make_qr_item(record, settings, icon) for record in records]
    logger.info(f"Сгенерировано QR-кодов: {len(items)}")
    return items
