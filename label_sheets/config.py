# -*- coding: utf-8 -*-
# label_sheets/config.py
import os
from dataclasses import dataclass
from pathlib import Path

# Стандартные размеры листов (ширина × высота в мм)
PAPER_SIZES = {
    'A3': (297, 420),
    'A4': (210, 297),
    'A5': (148, 210),
    'Letter': (216, 279),
    'Legal': (216, 356),
    'Tabloid': (279, 432),
}
CUSTOM_PAPER = 'custom'

# Значения по умолчанию для PrintSettings
DEFAULT_PAPER_SIZE = 'A4'
DEFAULT_CUSTOM_PAPER_SIZE = (210, 297)
DEFAULT_MARGIN = 10
DEFAULT_PRINTER_MARGIN = 5
DEFAULT_SPACING = 0
DEFAULT_COLUMNS = 3
DEFAULT_ROWS = 8
DEFAULT_SKIP_ITEMS = 0
DEFAULT_ITEM_COPIES = 1
DEFAULT_BORDER_SHOW_MODE = 'grid'

# QR-коды
ERROR_LEVELS = ('L', 'M', 'Q', 'H')
DEFAULT_ERROR_LEVEL = 'M'
DEFAULT_TEXT_SIZE = 5.0  # мм
DEFAULT_SHOW_CONTENT = True
DEFAULT_SHOW_ICON = True

# Предпросмотр
DEFAULT_PREVIEW_SCALE = 0.6
PREVIEW_DPI = 96
MM_PER_INCH = 25.4

# Сторонние библиотеки, логирование которых ограничивается уровнем WARNING
QUIET_LOGGERS = ('PIL', 'reportlab', 'qrcode')
PACKAGE_LOGGER = 'label_sheets'

LOGGING_CONFIG = {
    'level': 'INFO',
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'datefmt': '%Y-%m-%d %H:%M:%S'
}


@dataclass
class AppConfig:
    app_name: str = "Label Sheets"
    version: str = "1.0.0"
    settings_file: Path = Path(os.getenv('LABEL_SHEETS_SETTINGS', 'print_settings.json'))
    log_dir: str = os.getenv('LABEL_SHEETS_LOG_DIR', 'logs')
    preview_dpi: int = int(os.getenv('LABEL_SHEETS_PREVIEW_DPI', PREVIEW_DPI))
