"""
Text timeline renderer.

Draws a scheduled plan as horizontal bars on a shared minute axis, the way
the web UI's chart does: one row per step, ordered by start time, bars
scaled to the plan length with a minimum visible width.
"""
from dataclasses import dataclass
from typing import List, Optional

from kondate.config import settings
from kondate.models.schemas import Schedule, StepCategory

LABEL_WIDTH = 24

# Bar fill per category; uncategorized steps use "-"
CATEGORY_FILL = {
    StepCategory.PREP: "=",
    StepCategory.COOK: "#",
    StepCategory.SERVE: "*",
    StepCategory.WAIT: ".",
}

LEGEND = "Legend: = prep  # cook  * serve  . wait  - other  ~ can run in parallel"


@dataclass
class TimelineRow:
    """Bar geometry for one step, in character cells."""

    step_id: int
    label: str
    start: int
    end: int
    offset: int
    width: int
    fill: str
    can_parallel: bool


def timeline_rows(schedule: Schedule, width: Optional[int] = None) -> List[TimelineRow]:
    """
    Compute bar geometry for every scheduled step.

    Args:
        schedule: A schedule from StepScheduler.
        width: Bar area width in cells. Defaults to config.

    Returns:
        Rows sorted by start time, then id.
    """
    width = width or settings.timeline_width
    total = max(schedule.optimized_time, 1)
    scale = width / total

    rows = []
    for step in sorted(schedule.steps, key=lambda s: (s.start_time or 0, s.id)):
        start = step.start_time or 0
        offset = min(int(round(start * scale)), width - 1)
        bar = max(1, int(round(step.duration * scale)))
        bar = min(bar, width - offset)

        label = step.title or f"Step {step.id}"
        if step.dish_label:
            label = f"{label} [{step.dish_label}]"

        rows.append(TimelineRow(
            step_id=step.id,
            label=label,
            start=start,
            end=start + step.duration,
            offset=offset,
            width=bar,
            fill=CATEGORY_FILL.get(step.category, "-"),
            can_parallel=step.can_parallel,
        ))
    return rows


def _axis(total: int, width: int, tick: int) -> str:
    """Minute labels every `tick` minutes across the bar area."""
    scale = width / max(total, 1)
    cells = [" "] * (width + 4)
    last_end = -1
    for minute in range(0, total + 1, tick):
        position = int(round(minute * scale))
        text = str(minute)
        if position <= last_end or position + len(text) > len(cells):
            continue
        cells[position:position + len(text)] = list(text)
        last_end = position + len(text)
    return "".join(cells).rstrip()


def _fit(label: str) -> str:
    if len(label) > LABEL_WIDTH - 1:
        label = label[:LABEL_WIDTH - 2] + "…"
    return label.ljust(LABEL_WIDTH)


def render_timeline(
    schedule: Schedule,
    width: Optional[int] = None,
    tick_minutes: Optional[int] = None,
) -> str:
    """
    Render a schedule as a text chart.

    Args:
        schedule: A schedule from StepScheduler.
        width: Bar area width in cells. Defaults to config.
        tick_minutes: Axis tick spacing. Defaults to config.

    Returns:
        Multi-line chart text.
    """
    if not schedule.steps:
        return "No steps to schedule."

    width = width or settings.timeline_width
    tick = tick_minutes or settings.timeline_tick_minutes

    lines = [
        f"Total cooking time: {schedule.optimized_time} min",
        "",
        _fit("Step") + "|" + _axis(schedule.optimized_time, width, tick),
    ]

    for row in timeline_rows(schedule, width):
        bar = " " * row.offset + row.fill * row.width
        marker = "~" if row.can_parallel else " "
        lines.append(
            f"{_fit(row.label)}|{bar.ljust(width)}| {marker} "
            f"{row.start:>3}-{row.end:<3} min"
        )

    lines.append("")
    lines.append(LEGEND)

    if not schedule.converged:
        lines.append("Note: the plan could not be fully optimized; some steps may wait longer than needed.")

    return "\n".join(lines)
