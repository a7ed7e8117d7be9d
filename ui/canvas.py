"""
canvas.py — SVG Grid Renderer
==============================
Pure rendering function: Grid + current Frame → SVG string.

The renderer consumes:
  • grid    – the Grid (dimensions and every cell's classification)
  • frame   – the frame drawn last (VisitEvent / PathStep), or None
  • config  – visual config (cell size, colors, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation.  The caller passes in everything and gets back a string.
  - Cell coloring is a dict lookup: CellState value → hex color, using the
    classic palette (white floor, green start, red goal,
    black walls, yellow visited, cornflower path).
  - Every cell carries data-row / data-col so the page script can turn a
    click into a paint request without any geometry of its own.
"""

from typing import Dict, Optional

from grid import CellState, Grid
from algorithms import Frame, VisitEvent


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions
# ---------------------------------------------------------------------------
class CanvasConfig:
    cell_size: int = 30
    bg:        str = "#f0f0f0"

    cell_colors: Dict[str, str] = {
        "empty":   "#ffffff",
        "start":   "#00c800",
        "goal":    "#c80000",
        "barrier": "#000000",
        "visited": "#ffff00",
        "path":    "#6495ed",
    }

    grid_line:        str = "#c8c8c8"
    grid_line_width:  int = 1
    current_stroke:   str = "#ff8c00"   # outline of the cell drawn last
    current_width:    int = 3

    def __init__(self, cell_size: Optional[int] = None):
        if cell_size is not None:
            self.cell_size = cell_size


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_grid(
    grid: Grid,
    frame: Optional[Frame] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        grid   : The grid to render.
        frame  : The frame drawn last, outlined so the eye can follow it.
        config : Visual config.
    """
    size = config.cell_size
    width, height = grid.cols * size, grid.rows * size

    svg_parts = [
        f'<svg width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">'
    ]

    for r, row in enumerate(grid.snapshot()):
        for c, state in enumerate(row):
            svg_parts.append(_render_cell(r, c, state, config))

    if frame is not None:
        svg_parts.append(_render_highlight(frame, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Cell Rendering
# ---------------------------------------------------------------------------
def _render_cell(row: int, col: int, state: CellState, config: CanvasConfig) -> str:
    size = config.cell_size
    fill = config.cell_colors.get(state.value, config.cell_colors["empty"])
    return (
        f'<rect class="cell {state.value}" data-row="{row}" data-col="{col}" '
        f'x="{col * size}" y="{row * size}" width="{size}" height="{size}" '
        f'fill="{fill}" stroke="{config.grid_line}" stroke-width="{config.grid_line_width}"/>'
    )


def _render_highlight(frame: Frame, config: CanvasConfig) -> str:
    size = config.cell_size
    row, col = frame.position
    title = (
        f"visit #{frame.step_number}, cost {frame.cost}"
        if isinstance(frame, VisitEvent)
        else f"path step {frame.index}"
    )
    inset = config.current_width / 2
    return (
        f'<rect class="current" x="{col * size + inset}" y="{row * size + inset}" '
        f'width="{size - 2 * inset}" height="{size - 2 * inset}" fill="none" '
        f'stroke="{config.current_stroke}" stroke-width="{config.current_width}" '
        f'pointer-events="none"><title>{title}</title></rect>'
    )
