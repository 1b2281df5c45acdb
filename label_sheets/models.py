"""
Data classes и Enum для раскладки этикеток на листе
"""
import logging
import math
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from . import config
from .exceptions import ConfigurationError, RangeWarning

logger = logging.getLogger(__name__)


class BorderShowMode(Enum):
    NONE = "none"
    BORDER = "border"
    GRID = "grid"


class CellKind(Enum):
    ITEM = "item"
    SKIP = "skip"
    FILLER = "filler"


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise ConfigurationError(f"Поле {name}: ожидалось число, получено {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Поле {name}: ожидалось число, получено {value!r}")
    if not math.isfinite(number):
        raise ConfigurationError(f"Поле {name}: ожидалось конечное число, получено {value!r}")
    return number


def _record(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"Поле {key}: ожидался словарь, получено {type(value).__name__}")
    return value


def _integer(value: Any, name: str) -> int:
    number = _number(value, name)
    if not number.is_integer():
        raise ConfigurationError(f"Поле {name}: ожидалось целое число, получено {value!r}")
    return int(number)


def _compact(value: float):
    # 10.0 -> 10, чтобы JSON оставался читаемым
    return int(value) if float(value).is_integer() else value


@dataclass(frozen=True)
class PaperSize:
    width: float
    height: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default: 'PaperSize') -> 'PaperSize':
        return cls(
            width=_number(data.get('width', default.width), 'customPaperSize.width'),
            height=_number(data.get('height', default.height), 'customPaperSize.height'),
        )


@dataclass(frozen=True)
class Margins:
    top: float
    bottom: float
    left: float
    right: float

    @classmethod
    def uniform(cls, value: float) -> 'Margins':
        return cls(value, value, value, value)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default: 'Margins', name: str) -> 'Margins':
        return cls(**{
            edge: _number(data.get(edge, getattr(default, edge)), f"{name}.{edge}")
            for edge in ('top', 'bottom', 'left', 'right')
        })


@dataclass(frozen=True)
class Spacing:
    horizontal: float = 0
    vertical: float = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default: 'Spacing') -> 'Spacing':
        return cls(
            horizontal=_number(data.get('horizontal', default.horizontal), 'spacing.horizontal'),
            vertical=_number(data.get('vertical', default.vertical), 'spacing.vertical'),
        )


@dataclass(frozen=True)
class PrintSettings:
    paper_size: str = config.DEFAULT_PAPER_SIZE
    custom_paper_size: PaperSize = field(
        default_factory=lambda: PaperSize(*config.DEFAULT_CUSTOM_PAPER_SIZE))
    margin: Margins = field(default_factory=lambda: Margins.uniform(config.DEFAULT_MARGIN))
    printer_margin: Margins = field(
        default_factory=lambda: Margins.uniform(config.DEFAULT_PRINTER_MARGIN))
    spacing: Spacing = field(
        default_factory=lambda: Spacing(config.DEFAULT_SPACING, config.DEFAULT_SPACING))
    columns: int = config.DEFAULT_COLUMNS
    rows: int = config.DEFAULT_ROWS
    skip_items: int = config.DEFAULT_SKIP_ITEMS
    item_copies: int = config.DEFAULT_ITEM_COPIES
    border_show_mode: BorderShowMode = BorderShowMode(config.DEFAULT_BORDER_SHOW_MODE)

    # Ключи формата хранения (camelCase) -> имена полей
    PERSISTED_KEYS = {
        'paperSize': 'paper_size',
        'customPaperSize': 'custom_paper_size',
        'margin': 'margin',
        'printerMargin': 'printer_margin',
        'spacing': 'spacing',
        'columns': 'columns',
        'rows': 'rows',
        'skipItems': 'skip_items',
        'itemCopies': 'item_copies',
        'borderShowMode': 'border_show_mode',
    }

    @property
    def is_custom_paper(self) -> bool:
        return self.paper_size == config.CUSTOM_PAPER

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в формат хранения (все поля, camelCase)"""
        return {
            'paperSize': self.paper_size,
            'customPaperSize': {k: _compact(v) for k, v in asdict(self.custom_paper_size).items()},
            'margin': {k: _compact(v) for k, v in asdict(self.margin).items()},
            'printerMargin': {k: _compact(v) for k, v in asdict(self.printer_margin).items()},
            'spacing': {k: _compact(v) for k, v in asdict(self.spacing).items()},
            'columns': self.columns,
            'rows': self.rows,
            'skipItems': self.skip_items,
            'itemCopies': self.item_copies,
            'borderShowMode': self.border_show_mode.value,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'PrintSettings':
        """Создание настроек из частичного словаря; отсутствующие поля берутся по умолчанию"""
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Настройки должны быть словарём, получено {type(data).__name__}")

        for key in data:
            if key not in cls.PERSISTED_KEYS:
                logger.debug(f"Неизвестный ключ настроек пропущен: {key}")

        defaults = cls()
        border_value = data.get('borderShowMode', defaults.border_show_mode.value)
        try:
            border_show_mode = BorderShowMode(border_value)
        except ValueError:
            raise ConfigurationError(f"Неизвестный режим рамок: {border_value!r}")

        return cls(
            paper_size=str(data.get('paperSize', defaults.paper_size)),
            custom_paper_size=PaperSize.from_dict(
                _record(data, 'customPaperSize'), defaults.custom_paper_size),
            margin=Margins.from_dict(_record(data, 'margin'), defaults.margin, 'margin'),
            printer_margin=Margins.from_dict(
                _record(data, 'printerMargin'), defaults.printer_margin, 'printerMargin'),
            spacing=Spacing.from_dict(_record(data, 'spacing'), defaults.spacing),
            columns=_integer(data.get('columns', defaults.columns), 'columns'),
            rows=_integer(data.get('rows', defaults.rows), 'rows'),
            skip_items=_integer(data.get('skipItems', defaults.skip_items), 'skipItems'),
            item_copies=_integer(data.get('itemCopies', defaults.item_copies), 'itemCopies'),
            border_show_mode=border_show_mode,
        )


@dataclass(eq=False)
class Item:
    """Непрозрачный элемент печати: изображение и необязательная подпись"""
    visual: Any
    caption: Optional[str] = None
    key: Optional[str] = None


@dataclass(frozen=True)
class QRCodeData:
    value: str
    label: Optional[str] = None
    error_level: str = config.DEFAULT_ERROR_LEVEL


@dataclass(frozen=True)
class QRCodePrintSettings:
    print_settings: PrintSettings = field(default_factory=PrintSettings)
    show_content: bool = config.DEFAULT_SHOW_CONTENT
    text_size: float = config.DEFAULT_TEXT_SIZE
    show_icon: bool = config.DEFAULT_SHOW_ICON
    icon_path: Optional[str] = None

    PERSISTED_KEYS = {
        'printSettings': 'print_settings',
        'showContent': 'show_content',
        'textSize': 'text_size',
        'showIcon': 'show_icon',
        'iconPath': 'icon_path',
    }

    def to_dict(self) -> Dict[str, Any]:
        return {
            'printSettings': self.print_settings.to_dict(),
            'showContent': self.show_content,
            'textSize': _compact(self.text_size),
            'showIcon': self.show_icon,
            'iconPath': self.icon_path,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'QRCodePrintSettings':
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Настройки должны быть словарём, получено {type(data).__name__}")
        text_size = _number(data.get('textSize', config.DEFAULT_TEXT_SIZE), 'textSize')
        if text_size <= 0:
            raise ConfigurationError(f"Размер текста должен быть больше 0: {text_size}")
        return cls(
            print_settings=PrintSettings.from_dict(_record(data, 'printSettings')),
            show_content=bool(data.get('showContent', config.DEFAULT_SHOW_CONTENT)),
            text_size=text_size,
            show_icon=bool(data.get('showIcon', config.DEFAULT_SHOW_ICON)),
            icon_path=data.get('iconPath'),
        )


@dataclass(frozen=True)
class EdgePadding:
    top: float = 0
    bottom: float = 0
    left: float = 0
    right: float = 0


@dataclass(frozen=True)
class Cell:
    row: int
    column: int
    width: float
    height: float
    padding: EdgePadding
    border_show_mode: BorderShowMode
    kind: CellKind = CellKind.FILLER
    item: Optional[Item] = None
    source_index: Optional[int] = None
    copy_index: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.item is None

    @property
    def outer_width(self) -> float:
        return self.width + self.padding.left + self.padding.right

    @property
    def outer_height(self) -> float:
        return self.height + self.padding.top + self.padding.bottom


@dataclass(frozen=True)
class Page:
    index: int
    width: float
    height: float
    grid: Tuple[Tuple[Cell, ...], ...]

    @property
    def row_count(self) -> int:
        return len(self.grid)

    def cells(self) -> Iterator[Cell]:
        for row in self.grid:
            yield from row


@dataclass
class LayoutResult:
    pages: List[Page]
    settings: PrintSettings
    cell_width: float
    cell_height: float
    warnings: List[RangeWarning] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def cells(self) -> Iterator[Cell]:
        for page in self.pages:
            yield from page.cells()

    def item_cells(self) -> List[Cell]:
        return [cell for cell in self.cells() if cell.kind == CellKind.ITEM]
