"""
controls.py — Sidebar Panels
=============================
Each sidebar panel is a function of workspace state that returns an HTML
fragment.

Panels:
  • mode_panel          – what the user should do next, confirm / reset
  • algorithm_selector  – one button per algorithm, A* first
  • playback_controls   – play/pause/next/end/speed
  • analytics_panel     – cells visited, path length, …
  • comparison_panel    – every algorithm on the same grid, one row each

Panels never read the grid or the machine directly; main.py passes in
the values and drops the fragments into the page template.
"""

from typing import List, Optional

from algorithms import AlgoInfo
from engine import RunMetrics, SPEED_PRESETS


# ---------------------------------------------------------------------------
# Mode Panel
# ---------------------------------------------------------------------------
def mode_panel(mode: str, hint: str, can_confirm: bool = False) -> str:
    confirm_attr = "" if can_confirm else "disabled"
    return f"""
    <div class="panel mode-panel">
      <h3>Grid</h3>
      <p id="mode-hint" class="hint" data-mode="{mode}">{hint}</p>
      <div class="button-row">
        <button id="btn-confirm" class="btn-primary" {confirm_attr}>Confirm</button>
        <button id="btn-reset" class="btn-secondary" title="Reset (R)">Reset</button>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(algorithms: List[AlgoInfo], selected_key: str = "astar") -> str:
    buttons = []
    for algo in algorithms:
        sel = "selected" if algo.key == selected_key else ""
        buttons.append(
            f'<button class="algo-btn {sel}" data-algo="{algo.key}" '
            f'title="{algo.description}">{algo.short_label}</button>'
        )

    return f"""
    <div class="panel algorithm-selector">
      <h3>Algorithm</h3>
      <div class="button-row">
        {''.join(buttons)}
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_playing: bool = False,
    frames_shown: int = 0,
    speed: str = "medium",
    is_finished: bool = False,
) -> str:
    play_icon = "⏸" if is_playing else "▶"
    play_label = "Pause" if is_playing else "Play"

    options = []
    for preset in SPEED_PRESETS:
        sel = "selected" if preset == speed else ""
        options.append(f'<option value="{preset}" {sel}>{preset.capitalize()}</option>')

    return f"""
    <div class="panel playback-controls">
      <h3>Playback</h3>
      <div class="button-row">
        <button id="btn-play" title="{play_label}">{play_icon}</button>
        <button id="btn-next" title="Next frame">⏵</button>
        <button id="btn-end" title="Jump to end">⏭</button>
      </div>
      <div class="step-info">
        Frame <span id="frames-shown">{frames_shown}</span>
        {' <span class="finished-badge">FINISHED</span>' if is_finished else ''}
      </div>
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector">
          {''.join(options)}
        </select>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>Analytics</h3>
          <p class="placeholder">Run an algorithm to see metrics.</p>
        </div>
        """

    path_status = "Found" if metrics.path_found else "No path"

    return f"""
    <div class="panel analytics-panel">
      <h3>Analytics — {metrics.algo_label}</h3>
      <table>
        <tr><td>Cells Visited:</td><td><strong>{metrics.nodes_visited}</strong></td></tr>
        <tr><td>Path Length:</td><td><strong>{metrics.path_length} cells</strong></td></tr>
        <tr><td>Path Cost:</td><td><strong>{metrics.path_cost}</strong></td></tr>
        <tr><td>Total Frames:</td><td><strong>{metrics.total_frames}</strong></td></tr>
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
        <tr><td>Path:</td><td><strong>{path_status}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Panel
# ---------------------------------------------------------------------------
def comparison_panel(results: Optional[List[RunMetrics]] = None) -> str:
    if not results:
        return """
        <div class="panel comparison-panel">
          <h3>Comparison</h3>
          <p class="placeholder">Confirm the grid, then compare every algorithm on it.</p>
          <button id="btn-compare" class="btn-secondary">Compare All</button>
        </div>
        """

    found = [m for m in results if m.path_found]
    best_cost = min((m.path_cost for m in found), default=None)
    fewest = min(m.nodes_visited for m in results)

    rows = []
    for m in results:
        cost_cls = "best" if m.path_found and m.path_cost == best_cost else ""
        nodes_cls = "best" if m.nodes_visited == fewest else ""
        cost = m.path_cost if m.path_found else "—"
        rows.append(
            f'<tr><td>{m.algo_label}</td>'
            f'<td class="{nodes_cls}">{m.nodes_visited}</td>'
            f'<td class="{cost_cls}">{cost}</td>'
            f'<td>{m.wall_time_ms:.2f}</td></tr>'
        )

    return f"""
    <div class="panel comparison-panel">
      <h3>Comparison</h3>
      <table>
        <tr><th>Algorithm</th><th>Visited</th><th>Path Cost</th><th>ms</th></tr>
        {''.join(rows)}
      </table>
    </div>
    """
