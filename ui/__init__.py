"""
ui/
---
Presentation layer.

    from ui import render_grid
    from ui import mode_panel, algorithm_selector, …
"""

from ui.canvas import render_grid, CanvasConfig

from ui.controls import (
    mode_panel,
    algorithm_selector,
    playback_controls,
    analytics_panel,
    comparison_panel,
)

__all__ = [
    "render_grid",
    "CanvasConfig",
    "mode_panel",
    "algorithm_selector",
    "playback_controls",
    "analytics_panel",
    "comparison_panel",
]
