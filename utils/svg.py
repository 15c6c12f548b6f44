from __future__ import annotations

import html
import logging
import math
from pathlib import Path
from typing import Any

from models.dataset import AnomalyRecord
from models.plot import Axis, Heatmap, Legend
from services.interaction import on_pointer_enter

logger = logging.getLogger("anomaly_heatmap.svg")

TICK_SIZE = 6
TICK_PADDING = 3


# ---------------------------------------------------------------------------
# Escaping / number helpers
# ---------------------------------------------------------------------------


def _esc(text: Any) -> str:
    """Escape text for HTML/SVG interpolation."""
    return html.escape(str(text), quote=True)


def _num(value: Any) -> str:
    """Compact coordinate formatting; non-finite values become 0."""
    try:
        result = float(value)
    except (TypeError, ValueError):
        return "0"
    if not math.isfinite(result):
        return "0"
    rounded = round(result, 3)
    if rounded == 0:
        return "0"
    return f"{rounded:.3f}".rstrip("0").rstrip(".")


def _attrs(**attributes: Any) -> str:
    # trailing underscore avoids keywords (class_); other underscores become dashes
    parts = []
    for key, value in attributes.items():
        name = key.rstrip("_").replace("_", "-")
        parts.append(f'{name}="{_esc(value)}"')
    return " ".join(parts)


# ---------------------------------------------------------------------------
# Axes
# ---------------------------------------------------------------------------


def render_axis(axis: Axis) -> str:
    """Axis group: domain path plus one <g class="tick"> per tick."""
    tx, ty = axis.translate
    r0, r1 = axis.range
    transform = f"translate({_num(tx)},{_num(ty)})"
    lines = [f'<g {_attrs(id=axis.id, class_="axis", transform=transform)}>']

    if axis.orient == "left":
        domain = f"M{-TICK_SIZE},{_num(r0)}H0V{_num(r1)}H{-TICK_SIZE}"
    else:
        domain = f"M{_num(r0)},{TICK_SIZE}V0H{_num(r1)}V{TICK_SIZE}"
    lines.append(f'  <path class="domain" stroke="currentColor" fill="none" d="{domain}"/>')

    offset = TICK_SIZE + TICK_PADDING
    for tick in axis.ticks:
        if axis.orient == "left":
            lines.append(
                f'  <g class="tick" transform="translate(0,{_num(tick.position)})">'
                f'<line stroke="currentColor" x2="{-TICK_SIZE}"/>'
                f'<text fill="currentColor" x="{-offset}" dy="0.32em" text-anchor="end">'
                f"{_esc(tick.label)}</text></g>"
            )
        else:
            lines.append(
                f'  <g class="tick" transform="translate({_num(tick.position)},0)">'
                f'<line stroke="currentColor" y2="{TICK_SIZE}"/>'
                f'<text fill="currentColor" y="{offset}" dy="0.71em" text-anchor="middle">'
                f"{_esc(tick.label)}</text></g>"
            )
    lines.append("</g>")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Heatmap + legend
# ---------------------------------------------------------------------------


def render_cells(heatmap: Heatmap) -> str:
    rows = []
    for cell in heatmap.cells:
        attrs = _attrs(
            class_="cell",
            x=_num(cell.x),
            y=_num(cell.y),
            width=_num(cell.width),
            height=_num(cell.height),
            fill=cell.fill,
            data_year=cell.year,
            data_month=cell.month_index,
            data_temp=repr(cell.temperature),
            data_title=cell.tooltip_title,
            data_label=cell.tooltip_temperature,
        )
        rows.append(
            f"<rect {attrs}><title>{_esc(cell.tooltip_title)} {_esc(cell.tooltip_temperature)}</title></rect>"
        )
    return "\n".join(rows)


def render_legend(legend: Legend) -> str:
    size = _num(legend.cell_size)
    rows = ['<g id="legend">']
    for bucket in legend.buckets:
        rows.append(
            f'  <rect {_attrs(x=_num(bucket.x), y=_num(bucket.y), width=size, height=size, fill=bucket.color)}/>'
        )
    rows.append("</g>")
    rows.append(render_axis(legend.axis))
    return "\n".join(rows)


def render_svg(heatmap: Heatmap, legend: Legend) -> str:
    """Standalone SVG document with the heatmap, both axes and the legend."""
    plot = heatmap.plot
    return "\n".join(
        [
            f'<svg id="plot" xmlns="http://www.w3.org/2000/svg" viewBox="{plot.view_box}" '
            f'font-family="sans-serif" font-size="10">',
            render_cells(heatmap),
            render_axis(heatmap.x_axis),
            render_axis(heatmap.y_axis),
            render_legend(legend),
            "</svg>",
        ]
    )


# ---------------------------------------------------------------------------
# HTML page with hover tooltip
# ---------------------------------------------------------------------------

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
  body {{ margin: 0; font-family: sans-serif; }}
  #plot {{ width: 100%; aspect-ratio: {aspect}; display: block; }}
  .cell:hover {{ stroke: #000; stroke-width: 1; }}
  .tooltip {{
    position: fixed; pointer-events: none; padding: 6px 8px;
    display: flex; flex-direction: column; gap: 2px;
    background: rgba(17, 24, 39, .85); color: #fff; border-radius: 4px; font-size: 13px;
  }}
  .tooltip.hidden {{ display: none; }}
</style>
</head>
<body>
<h1 id="title">{title}</h1>
<h2 id="description">{description}</h2>
{svg}
<div id="tooltip" class="tooltip hidden"></div>
<script>
(function () {{
  var tooltip = document.getElementById("tooltip");
  var offset = {offset};
  document.querySelectorAll("#plot .cell").forEach(function (cell) {{
    cell.addEventListener("mouseover", function (event) {{
      tooltip.innerHTML = "";
      [cell.dataset.title, cell.dataset.label].forEach(function (text) {{
        var span = document.createElement("span");
        span.textContent = text;
        tooltip.appendChild(span);
      }});
      tooltip.style.top = (event.clientY + offset) + "px";
      tooltip.style.left = (event.clientX + offset) + "px";
      tooltip.setAttribute("data-year", cell.dataset.year);
      tooltip.classList.remove("hidden");
    }});
    cell.addEventListener("mouseout", function () {{
      tooltip.classList.add("hidden");
    }});
  }});
}})();
</script>
</body>
</html>
"""


def render_page(
    heatmap: Heatmap,
    legend: Legend,
    title: str = "Monthly Global Land-Surface Temperature",
) -> str:
    """HTML page embedding the SVG plus the floating tooltip element."""
    plot = heatmap.plot
    cells = heatmap.cells
    offset = plot.tooltip_offset
    if cells:
        description = (
            f"{cells[0].year} - {cells[-1].year}: base temperature "
            f"{heatmap.base_temperature:g}°C"
        )
        first = cells[0]
        record = AnomalyRecord(year=first.year, month=first.month_index + 1, variance=first.variance)
        offset = on_pointer_enter(record, heatmap.base_temperature, 0, 0, plot.tooltip_offset).left
    else:
        description = ""
    return _PAGE_TEMPLATE.format(
        title=_esc(title),
        description=_esc(description),
        aspect=f"{_num(plot.width)} / {_num(plot.height)}",
        svg=render_svg(heatmap, legend),
        offset=_num(offset),
    )


def write_text(path: str | Path, content: str) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    logger.info("Wrote %s (%d bytes)", target, len(content.encode("utf-8")))
    return target
