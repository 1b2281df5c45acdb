# -*- coding: utf-8 -*-
# label_sheets/layout_engine.py
"""
Расчет раскладки этикеток по страницам.

Чистый конвейер без состояния: нормализация настроек -> размер бумаги ->
размер ячейки -> развёртка элементов (пропуски + копии) -> строки ->
страницы -> компенсирующие отступы принтера. Никакого ввода-вывода,
кроме логирования; входные настройки не изменяются.
"""
import logging
import math
from dataclasses import replace
from typing import Any, Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

from . import config
from .exceptions import ConfigurationError, RangeWarning
from .models import (
    BorderShowMode, Cell, CellKind, EdgePadding, Item, LayoutResult, Margins, Page, PaperSize,
    PrintSettings, Spacing
)

logger = logging.getLogger(__name__)

SettingsInput = Union[PrintSettings, dict, None]


class Slot(NamedTuple):
    kind: CellKind
    item: Optional[Item] = None
    source_index: Optional[int] = None
    copy_index: Optional[int] = None


FILLER = Slot(CellKind.FILLER)


def _warn(warnings: List[RangeWarning], message: str):
    logger.warning(message)
    warnings.append(RangeWarning(message))


def resolve_paper_dimensions(settings: PrintSettings) -> PaperSize:
    """Размер листа в мм: произвольный или из стандартных форматов"""
    if settings.is_custom_paper:
        paper = settings.custom_paper_size
        if paper.width <= 0 or paper.height <= 0:
            raise ConfigurationError(
                f"Произвольный размер листа должен быть положительным: {paper.width}x{paper.height}")
        return paper

    dimensions = config.PAPER_SIZES.get(settings.paper_size)
    if dimensions is None:
        raise ConfigurationError(f"Неизвестный формат бумаги: {settings.paper_size!r}")
    return PaperSize(*dimensions)


def _clamp_margins(margin: Margins, paper: PaperSize, warnings: List[RangeWarning]) -> Margins:
    limits = {
        'top': paper.height / 2,
        'bottom': paper.height / 2,
        'left': paper.width / 2,
        'right': paper.width / 2,
    }
    values = {}
    for edge, limit in limits.items():
        value = getattr(margin, edge)
        if value > limit:
            _warn(warnings, f"Поле margin.{edge}={value} больше половины листа, ограничено до {limit}")
            value = limit
        values[edge] = value
    return Margins(**values)


def _clamp_printer_margins(margin: Margins, warnings: List[RangeWarning]) -> Margins:
    values = {}
    for edge in ('top', 'bottom', 'left', 'right'):
        value = getattr(margin, edge)
        if value < 0:
            _warn(warnings, f"Поле printerMargin.{edge}={value} отрицательное, ограничено до 0")
            value = 0
        values[edge] = value
    return Margins(**values)


def _clamp_spacing(spacing: Spacing, warnings: List[RangeWarning]) -> Spacing:
    horizontal, vertical = spacing.horizontal, spacing.vertical
    if horizontal < 0:
        _warn(warnings, f"Интервал по горизонтали {horizontal} отрицательный, ограничен до 0")
        horizontal = 0
    if vertical < 0:
        _warn(warnings, f"Интервал по вертикали {vertical} отрицательный, ограничен до 0")
        vertical = 0
    return Spacing(horizontal, vertical)


def normalize_settings(settings: SettingsInput) -> Tuple[PrintSettings, List[RangeWarning]]:
    """
    Привести настройки к полностью заполненному значению.

    Принимает None, частичный словарь в формате хранения или PrintSettings.
    Возвращает новый PrintSettings и список предупреждений об ограниченных
    значениях. Неисправимые ошибки поднимают ConfigurationError.
    """
    if settings is None:
        settings = PrintSettings()
    elif isinstance(settings, dict):
        settings = PrintSettings.from_dict(settings)
    elif not isinstance(settings, PrintSettings):
        raise ConfigurationError(f"Неподдерживаемый тип настроек: {type(settings).__name__}")

    if settings.columns < 1:
        raise ConfigurationError(f"Количество колонок должно быть не меньше 1: {settings.columns}")
    if settings.rows < 1:
        raise ConfigurationError(f"Количество строк должно быть не меньше 1: {settings.rows}")

    try:
        border_show_mode = BorderShowMode(settings.border_show_mode)
    except ValueError:
        raise ConfigurationError(f"Неизвестный режим рамок: {settings.border_show_mode!r}")

    paper = resolve_paper_dimensions(settings)
    warnings: List[RangeWarning] = []

    skip_items = settings.skip_items
    if skip_items < 0:
        _warn(warnings, f"skipItems={skip_items} отрицательный, ограничен до 0")
        skip_items = 0

    item_copies = settings.item_copies
    if item_copies < 1:
        _warn(warnings, f"itemCopies={item_copies} меньше 1, ограничен до 1")
        item_copies = 1

    normalized = replace(
        settings,
        margin=_clamp_margins(settings.margin, paper, warnings),
        printer_margin=_clamp_printer_margins(settings.printer_margin, warnings),
        spacing=_clamp_spacing(settings.spacing, warnings),
        skip_items=skip_items,
        item_copies=item_copies,
        border_show_mode=border_show_mode,
    )
    return normalized, warnings


def compute_cell_size(settings: PrintSettings) -> Tuple[float, float]:
    """Номинальный размер ячейки в мм (без ограничения снизу)"""
    paper = resolve_paper_dimensions(settings)
    margin, spacing = settings.margin, settings.spacing

    # Интервал вычитается дважды: до и после деления
    cell_width = (paper.width - margin.left - margin.right - spacing.horizontal) \
        / settings.columns - spacing.horizontal
    cell_height = (paper.height - margin.top - margin.bottom - spacing.vertical) \
        / settings.rows - spacing.vertical
    return cell_width, cell_height


def expand_items(items: Iterable[Item], skip_items: int, item_copies: int) -> List[Slot]:
    slots = [Slot(CellKind.SKIP) for _ in range(skip_items)]
    for source_index, item in enumerate(items):
        for copy_index in range(item_copies):
            slots.append(Slot(CellKind.ITEM, item, source_index, copy_index))
    return slots


def chunk(sequence: Sequence[Any], size: int) -> List[List[Any]]:
    if size < 1:
        raise ConfigurationError(f"Размер группы должен быть не меньше 1: {size}")
    return [list(sequence[start:start + size]) for start in range(0, len(sequence), size)]


def edge_padding(settings: PrintSettings, row_idx: int, col_idx: int) -> EdgePadding:
    """Дополнительные отступы крайних ячеек под непечатаемую зону принтера"""
    margin, printer = settings.margin, settings.printer_margin
    return EdgePadding(
        top=max(printer.top - margin.top, 0) if row_idx == 0 else 0,
        bottom=max(printer.bottom - margin.bottom, 0) if row_idx == settings.rows - 1 else 0,
        left=max(printer.left - margin.left, 0) if col_idx == 0 else 0,
        right=max(printer.right - margin.right, 0) if col_idx == settings.columns - 1 else 0,
    )


def count_pages(settings: SettingsInput, item_count: int) -> int:
    normalized, _ = normalize_settings(settings)
    total = normalized.skip_items + item_count * normalized.item_copies
    row_count = math.ceil(total / normalized.columns)
    return math.ceil(row_count / normalized.rows)


def layout(settings: SettingsInput, items: Iterable[Item]) -> LayoutResult:
    """Построить страницы с ячейками для списка элементов"""
    normalized, warnings = normalize_settings(settings)
    paper = resolve_paper_dimensions(normalized)

    cell_width, cell_height = compute_cell_size(normalized)
    logger.debug(f"Номинальная ячейка: {cell_width:.3f}x{cell_height:.3f} мм")
    if cell_width <= 0:
        _warn(warnings, f"Ширина ячейки {cell_width:.3f} мм не положительная, ограничена до 0")
        cell_width = 0
    if cell_height <= 0:
        _warn(warnings, f"Высота ячейки {cell_height:.3f} мм не положительная, ограничена до 0")
        cell_height = 0

    slots = expand_items(items, normalized.skip_items, normalized.item_copies)
    rows_of_slots = chunk(slots, normalized.columns)
    if rows_of_slots:
        last_row = rows_of_slots[-1]
        last_row.extend([FILLER] * (normalized.columns - len(last_row)))

    pages = []
    for page_idx, block in enumerate(chunk(rows_of_slots, normalized.rows)):
        grid = tuple(
            tuple(
                Cell(
                    row=row_idx,
                    column=col_idx,
                    width=cell_width,
                    height=cell_height,
                    padding=edge_padding(normalized, row_idx, col_idx),
                    border_show_mode=normalized.border_show_mode,
                    kind=slot.kind,
                    item=slot.item,
                    source_index=slot.source_index,
                    copy_index=slot.copy_index,
                )
                for col_idx, slot in enumerate(row)
            )
            for row_idx, row in enumerate(block)
        )
        pages.append(Page(index=page_idx, width=paper.width, height=paper.height, grid=grid))

    logger.info(f"Раскладка: {len(pages)} стр., {len(slots)} позиций, "
                f"сетка {normalized.columns}x{normalized.rows}, "
                f"ячейка {cell_width:.1f}x{cell_height:.1f} мм")
    return LayoutResult(
        pages=pages,
        settings=normalized,
        cell_width=cell_width,
        cell_height=cell_height,
        warnings=warnings,
    )
