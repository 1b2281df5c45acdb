"""
Точка входа командной строки: раскладка QR-кодов в PDF и предпросмотр
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import config
from .config import AppConfig
from .exceptions import LabelSheetsException
from .models import QRCodeData
from .printing_app import PrintingApp
from .utils.logger import setup_logging

logger = logging.getLogger(__name__)


def read_records(values_file: Path, error_level: str) -> List[QRCodeData]:
    """Одна запись на строку: `значение` или `значение<TAB>подпись`; пустые строки пропускаются"""
    records = []
    with open(values_file, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.rstrip('\r\n')
            if not line.strip():
                continue
            value, _, label = line.partition('\t')
            records.append(QRCodeData(value=value, label=label or None, error_level=error_level))
    return records


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Печать листов с QR-кодами")
    parser.add_argument('values_file', type=Path, help="Файл со значениями, по одному на строку")
    parser.add_argument('-s', '--settings', dest='settings_file', type=Path,
                        default=AppConfig().settings_file, help="JSON файл настроек печати")
    parser.add_argument('-o', '--output', dest='output_file', type=Path, default=None,
                        help="Выходной PDF файл")
    parser.add_argument('--preview-dir', type=Path, default=None,
                        help="Каталог для PNG предпросмотра страниц")
    parser.add_argument('--preview-scale', type=float, default=config.DEFAULT_PREVIEW_SCALE)
    parser.add_argument('--error-level', choices=config.ERROR_LEVELS, default=config.DEFAULT_ERROR_LEVEL)
    parser.add_argument('--columns', type=int, default=None)
    parser.add_argument('--rows', type=int, default=None)
    parser.add_argument('--skip', dest='skip_items', type=int, default=None)
    parser.add_argument('--copies', dest='item_copies', type=int, default=None)
    parser.add_argument('--log-dir', default=AppConfig().log_dir)
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_dir, 'DEBUG' if args.verbose else config.LOGGING_CONFIG['level'])

    if args.output_file is None and args.preview_dir is None:
        logger.error("Нужно указать --output и/или --preview-dir")
        return 2

    try:
        app = PrintingApp(AppConfig(settings_file=args.settings_file, log_dir=args.log_dir))
        overrides = {
            name: getattr(args, name)
            for name in ('columns', 'rows', 'skip_items', 'item_copies')
            if getattr(args, name) is not None
        }
        if overrides:
            app.update_settings(persist=False, **overrides)

        records = read_records(args.values_file, args.error_level)
        if args.output_file is not None:
            summary = app.print_pdf(records, args.output_file)
            logger.info(f"Страниц: {summary['total_pages']}, этикеток: {summary['total_items']}")
        if args.preview_dir is not None:
            app.preview(records, args.preview_dir, args.preview_scale)
    except (LabelSheetsException, OSError) as e:
        logger.error(f"❌ {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
