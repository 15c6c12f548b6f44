"""
Pointer interaction for heatmap cells.

These functions define the tooltip behaviour: label text, the offset from
the pointer, and visibility.  The HTML page script in ``utils/svg.py``
mirrors them: it shows the labels precomputed here and takes its offset
from ``on_pointer_enter`` evaluated at the origin.
"""
from __future__ import annotations

import calendar

import config
from models.dataset import AnomalyRecord
from models.plot import TooltipState


def month_name(month_index: int) -> str:
    """English month name for a zero-based index (0 = January)."""
    if not 0 <= month_index < 12:
        raise ValueError(f"month index {month_index} outside 0-11")
    return calendar.month_name[month_index + 1]


def format_temperature(temperature: float) -> str:
    return f"{temperature:.1f}°C"


def tooltip_title(record: AnomalyRecord) -> str:
    return f"{month_name(record.month - 1)} {record.year}"


def on_pointer_enter(
    record: AnomalyRecord,
    base_temperature: float,
    client_x: float,
    client_y: float,
    offset: float = config.TOOLTIP_OFFSET_PX,
) -> TooltipState:
    """Tooltip shown next to the pointer while it is over a cell."""
    return TooltipState(
        visible=True,
        title=tooltip_title(record),
        temperature=format_temperature(record.temperature(base_temperature)),
        left=client_x + offset,
        top=client_y + offset,
        year=record.year,
    )


def on_pointer_leave() -> TooltipState:
    return TooltipState(visible=False)
