"""
Главный класс приложения для печати листов с QR-кодами
"""
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .config import AppConfig
from .layout_engine import layout
from .models import LayoutResult, QRCodeData, QRCodePrintSettings
from .pdf_generator import PDFGenerator
from .preview import PreviewRenderer
from .qr_items import make_qr_items
from .settings_store import SettingsStore, update_settings

logger = logging.getLogger(__name__)


class PrintingApp:
    def __init__(self, app_config: Optional[AppConfig] = None):
        self.app_config = app_config or AppConfig()
        self.store = SettingsStore(self.app_config.settings_file)
        self.settings = self.store.load()
        self.logger = logging.getLogger(__name__)

    def update_settings(self, persist: bool = True, **changes) -> QRCodePrintSettings:
        """Изменить параметры сетки (PrintSettings) и заменить текущие настройки"""
        print_settings = update_settings(self.settings.print_settings, **changes)
        if persist:
            self.settings = self.store.update(self.settings, print_settings=print_settings)
        else:
            self.settings = update_settings(self.settings, print_settings=print_settings)
        return self.settings

    def update_qr_settings(self, **changes) -> QRCodePrintSettings:
        self.settings = self.store.update(self.settings, **changes)
        return self.settings

    def build_layout(self, records: Iterable[QRCodeData]) -> LayoutResult:
        items = make_qr_items(records, self.settings)
        result = layout(self.settings.print_settings, items)
        for warning in result.warnings:
            self.logger.info(f"Предупреждение раскладки: {warning}")
        return result

    def print_pdf(self, records: Iterable[QRCodeData], output_file: Union[str, Path]) -> dict:
        self.logger.info(f"Начало обработки, выходной файл: {output_file}")
        result = self.build_layout(records)
        generator = PDFGenerator(text_size=self.settings.text_size)
        summary = generator.generate_pdf(result, output_file)
        self.logger.info(f"✅ PDF успешно создан: {output_file}")
        return summary

    def preview(self, records: Iterable[QRCodeData], output_dir: Union[str, Path],
                scale: float) -> List[Path]:
        result = self.build_layout(records)
        renderer = PreviewRenderer(dpi=self.app_config.preview_dpi, text_size=self.settings.text_size)
        return renderer.save_previews(result, output_dir, scale)
