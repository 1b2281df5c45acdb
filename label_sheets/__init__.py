"""
Раскладка и печать листов с этикетками
"""

from .exceptions import (
    LabelSheetsException, ConfigurationError, SettingsPersistenceError,
    RenderError, RangeWarning
)
from .models import (
    BorderShowMode, CellKind, PaperSize, Margins, Spacing, PrintSettings,
    Item, QRCodeData, QRCodePrintSettings, EdgePadding, Cell, Page, LayoutResult
)
from .layout_engine import layout, normalize_settings, count_pages
from .settings_store import SettingsStore, update_settings
from .qr_items import make_qr_items
from .pdf_generator import PDFGenerator
from .preview import PreviewRenderer
from .printing_app import PrintingApp

__all__ = [
    'LabelSheetsException',
    'ConfigurationError',
    'SettingsPersistenceError',
    'RenderError',
    'RangeWarning',
    'BorderShowMode',
    'CellKind',
    'PaperSize',
    'Margins',
    'Spacing',
    'PrintSettings',
    'Item',
    'QRCodeData',
    'QRCodePrintSettings',
    'EdgePadding',
    'Cell',
    'Page',
    'LayoutResult',
    'layout',
    'normalize_settings',
    'count_pages',
    'SettingsStore',
    'update_settings',
    'make_qr_items',
    'PDFGenerator',
    'PreviewRenderer',
    'PrintingApp'
]
