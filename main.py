"""
main.py — Grid Pathfinding Visualizer Flask App
================================================
The web server that drives the visualizer.

Routes:
  GET  /                       – main UI
  GET  /api/state              – current workspace state
  POST /api/paint              – click {row, col} or drag stroke {cells: [[r, c], …]}
  POST /api/confirm            – freeze start / goal / barriers
  POST /api/algorithm          – select algorithm {algorithm}
  POST /api/run                – start a run {algorithm?}
  POST /api/step/next          – pull one frame
  POST /api/step/end           – pull every remaining frame
  POST /api/step/play          – toggle play/pause
  POST /api/config/speed       – playback speed preset
  POST /api/reset              – back to an empty grid
  GET  /api/compare            – every algorithm on the confirmed grid

State management:
  Each browser session gets a Workspace (interaction machine + stepper)
  kept in an in-process store keyed by a random token in the Flask
  session.  The store holds at most `max_workspaces` entries and drops the
  least recently used one when full.  Nothing is persisted; restarting
  the server loses every grid.
"""

import logging
import secrets
import sys
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Optional

from flask import Flask, jsonify, render_template_string, request, session

from grid import GridSearchError, RunInProgressError
from algorithms import get_algorithm, list_algorithms
from engine import (
    InteractionMachine,
    InteractionMode,
    Recorder,
    RunMetrics,
    SPEED_PRESETS,
    Stepper,
    compare_all,
)
from settings import load_settings
from ui import (
    CanvasConfig,
    render_grid,
    mode_panel,
    algorithm_selector,
    playback_controls,
    analytics_panel,
    comparison_panel,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Workspace — everything one browser session owns
# ---------------------------------------------------------------------------
@dataclass
class Workspace:
    machine: InteractionMachine
    stepper: Stepper
    speed:   str = "medium"
    metrics: Optional[RunMetrics] = None


def new_workspace(settings: Dict[str, Any]) -> Workspace:
    machine = InteractionMachine(
        rows=settings["rows"],
        cols=settings["cols"],
        algorithm=settings["algorithm"],
    )
    return Workspace(machine=machine, stepper=Stepper(speed=settings["speed"]), speed=settings["speed"])


def _is_cell(value: Any) -> bool:
    """A [row, col] pair of plain integers, as the page script sends them."""
    return (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    )


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------
def create_app(settings: Optional[Dict[str, Any]] = None) -> Flask:
    settings = settings if settings is not None else load_settings()

    app = Flask(__name__)
    app.secret_key = secrets.token_hex(32)
    app.config["GRIDSEARCH"] = settings
    # least recently used first; the oldest is dropped once the cap is reached
    workspaces: "OrderedDict[str, Workspace]" = OrderedDict()
    app.extensions["gridsearch.workspaces"] = workspaces
    canvas_config = CanvasConfig(cell_size=settings["cell_size"])

    # -----------------------------------------------------------------------
    # Session helpers
    # -----------------------------------------------------------------------
    def get_workspace() -> Workspace:
        token = session.get("workspace")
        if token is not None and token in workspaces:
            workspaces.move_to_end(token)
            return workspaces[token]

        while len(workspaces) >= settings["max_workspaces"]:
            dropped, _ = workspaces.popitem(last=False)
            logger.info("Workspace store full, dropped %s", dropped)
        token = secrets.token_hex(16)
        session["workspace"] = token
        workspaces[token] = new_workspace(settings)
        logger.debug("New workspace %s", token)
        return workspaces[token]

    def json_body() -> Dict[str, Any]:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def render(ws: Workspace) -> str:
        return render_grid(ws.machine.grid, ws.stepper.current_frame, canvas_config)

    def state_payload(ws: Workspace) -> Dict[str, Any]:
        machine = ws.machine
        return {
            **machine.to_dict(),
            "svg":          render(ws),
            "can_confirm":  machine.can_confirm,
            "frames_shown": ws.stepper.frames_shown,
            "playback":     ws.stepper.state.value,
            "speed":        ws.speed,
        }

    def frame_payload(ws: Workspace) -> Dict[str, Any]:
        frame = ws.stepper.current_frame
        run = ws.machine.current_run
        return {
            "svg":          render(ws),
            "frame":        frame.to_dict() if frame else None,
            "frames_shown": ws.stepper.frames_shown,
            "finished":     ws.stepper.is_finished,
            "playback":     ws.stepper.state.value,
            "run":          run.summary() if run else None,
        }

    # -----------------------------------------------------------------------
    # Errors
    # -----------------------------------------------------------------------
    @app.errorhandler(GridSearchError)
    def handle_grid_error(exc: GridSearchError):
        status = 409 if isinstance(exc, RunInProgressError) else 400
        logger.debug("Rejected request: %s (%s)", exc, exc.kind)
        return jsonify({"error": str(exc), "kind": exc.kind}), status

    # -----------------------------------------------------------------------
    # Main UI Route
    # -----------------------------------------------------------------------
    @app.route("/")
    def index():
        ws = get_workspace()
        machine = ws.machine
        return render_template_string(
            INDEX_TEMPLATE,
            svg=render(ws),
            mode=mode_panel(machine.mode.value, machine.hint, machine.can_confirm),
            algo_selector=algorithm_selector(list_algorithms(), machine.algorithm.value),
            playback=playback_controls(
                is_playing=ws.stepper.is_playing,
                frames_shown=ws.stepper.frames_shown,
                speed=ws.speed,
                is_finished=ws.stepper.is_finished,
            ),
            analytics=analytics_panel(ws.metrics),
            comparison=comparison_panel(),
        )

    @app.route("/api/state")
    def api_state():
        return jsonify(state_payload(get_workspace()))

    # -----------------------------------------------------------------------
    # API: Editing
    # -----------------------------------------------------------------------
    @app.route("/api/paint", methods=["POST"])
    def api_paint():
        ws = get_workspace()
        data = json_body()
        if "cells" in data:
            cells = data["cells"]
            if not isinstance(cells, list) or not all(_is_cell(cell) for cell in cells):
                return jsonify({"error": "cells must be a list of [row, col] integer pairs"}), 400
            changed = ws.machine.paint_stroke([tuple(cell) for cell in cells])
        elif "row" in data and "col" in data:
            if not _is_cell([data["row"], data["col"]]):
                return jsonify({"error": "row and col must be integers"}), 400
            changed = int(ws.machine.paint((data["row"], data["col"])))
        else:
            return jsonify({"error": "Send {row, col} or {cells}"}), 400
        payload = state_payload(ws)
        payload["changed"] = changed
        return jsonify(payload)

    @app.route("/api/confirm", methods=["POST"])
    def api_confirm():
        ws = get_workspace()
        ws.machine.confirm()
        return jsonify(state_payload(ws))

    @app.route("/api/algorithm", methods=["POST"])
    def api_algorithm():
        ws = get_workspace()
        data = json_body()
        algo = ws.machine.select_algorithm(data.get("algorithm", ""))
        return jsonify({
            "algorithm":     algo.value,
            "algo_selector": algorithm_selector(list_algorithms(), algo.value),
        })

    @app.route("/api/reset", methods=["POST"])
    def api_reset():
        ws = get_workspace()
        ws.machine.reset()
        ws.stepper.reset()
        ws.metrics = None
        return jsonify(state_payload(ws))

    # -----------------------------------------------------------------------
    # API: Run & playback
    # -----------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        ws = get_workspace()
        data = json_body()
        algorithm = data.get("algorithm")

        # picking a new algorithm mid-animation finishes the old run first
        run = ws.machine.current_run
        if run is not None and run.active:
            ws.stepper.jump_to_end()

        run = ws.machine.run(algorithm)
        ws.stepper.reset()
        ws.stepper.start(run.frames())
        ws.metrics = Recorder().record(ws.machine.grid, run.algorithm)

        payload = frame_payload(ws)
        payload["analytics"] = analytics_panel(ws.metrics)
        payload["algo_selector"] = algorithm_selector(list_algorithms(), run.algorithm.value)
        payload["label"] = get_algorithm(run.algorithm).label
        return jsonify(payload)

    @app.route("/api/step/next", methods=["POST"])
    def api_step_next():
        ws = get_workspace()
        ws.stepper.next_step()
        return jsonify(frame_payload(ws))

    @app.route("/api/step/end", methods=["POST"])
    def api_step_end():
        ws = get_workspace()
        ws.stepper.jump_to_end()
        return jsonify(frame_payload(ws))

    @app.route("/api/step/play", methods=["POST"])
    def api_step_play():
        ws = get_workspace()
        ws.stepper.toggle_play()
        return jsonify({"is_playing": ws.stepper.is_playing, "interval": ws.stepper.speed})

    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        ws = get_workspace()
        speed = json_body().get("speed", "medium")
        if not isinstance(speed, str) or speed not in SPEED_PRESETS:
            speed = "medium"
        ws.stepper.set_speed(speed)
        ws.speed = speed
        return jsonify({"speed": speed, "interval": ws.stepper.speed})

    # -----------------------------------------------------------------------
    # API: Comparison
    # -----------------------------------------------------------------------
    @app.route("/api/compare")
    def api_compare():
        ws = get_workspace()
        if ws.machine.mode is not InteractionMode.CONFIRMED:
            return jsonify({"error": "Confirm the grid before comparing", "kind": "not_confirmed"}), 400
        results = compare_all(ws.machine.grid)
        return jsonify({
            "results":    [m.__dict__ for m in results],
            "comparison": comparison_panel(results),
        })

    return app


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Grid Pathfinding Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body { font-family: sans-serif; display: flex; background: #f0f0f0; color: #222; }
    #sidebar { width: 320px; padding: 16px; }
    #main { flex: 1; padding: 16px; }
    .panel { background: #fff; border: 1px solid #ccc; border-radius: 6px; padding: 12px; margin-bottom: 12px; }
    .panel h3 { margin-bottom: 8px; font-size: 15px; }
    .button-row { display: flex; gap: 6px; flex-wrap: wrap; }
    button { padding: 6px 10px; border: 1px solid #888; border-radius: 4px; background: #b4b4ff; cursor: pointer; }
    button:disabled { opacity: 0.5; cursor: default; }
    .algo-btn.selected { background: #00b4ff; }
    .hint { color: #555; margin-bottom: 8px; }
    td.best { font-weight: bold; color: #0a7; }
    #error { color: #c00; min-height: 1.2em; }
    #canvas-svg rect.cell { cursor: pointer; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="mode">{{ mode|safe }}</div>
    <div id="algo">{{ algo_selector|safe }}</div>
    {{ playback|safe }}
    <div id="analytics">{{ analytics|safe }}</div>
    <div id="comparison">{{ comparison|safe }}</div>
  </div>
  <div id="main">
    <p id="error"></p>
    <div id="canvas-svg">{{ svg|safe }}</div>
  </div>
  <script>
    let timer = null;
    let interval = 0.05;
    let dragging = false;
    let stroke = [];

    async function call(method, url, data) {
      const opts = {method, headers: {'Content-Type': 'application/json'}};
      if (data !== undefined) opts.body = JSON.stringify(data);
      const res = await fetch(url, opts);
      const body = await res.json();
      document.getElementById('error').textContent = body.error || '';
      return body;
    }
    const post = (url, data) => call('POST', url, data || {});

    function show(data) {
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.hint) {
        document.getElementById('mode-hint').textContent = data.hint;
        document.getElementById('btn-confirm').disabled = !data.can_confirm;
      }
      if (data.frames_shown !== undefined) document.getElementById('frames-shown').textContent = data.frames_shown;
      if (data.analytics) document.getElementById('analytics').innerHTML = data.analytics;
      if (data.algo_selector) { document.getElementById('algo').innerHTML = data.algo_selector; bindAlgoButtons(); }
    }

    function stopTimer() { if (timer) { clearInterval(timer); timer = null; } }

    function startTimer() {
      stopTimer();
      timer = setInterval(async () => {
        const data = await post('/api/step/next');
        show(data);
        if (data.finished) { stopTimer(); }
      }, interval * 1000);
    }

    // Painting: click or drag across cells
    const canvas = document.getElementById('canvas-svg');
    canvas.addEventListener('mousedown', (e) => {
      const cell = e.target.closest('rect.cell');
      if (!cell) return;
      dragging = true;
      stroke = [[+cell.dataset.row, +cell.dataset.col]];
    });
    canvas.addEventListener('mouseover', (e) => {
      if (!dragging) return;
      const cell = e.target.closest('rect.cell');
      if (!cell) return;
      const pos = [+cell.dataset.row, +cell.dataset.col];
      const last = stroke[stroke.length - 1];
      if (last[0] !== pos[0] || last[1] !== pos[1]) stroke.push(pos);
    });
    window.addEventListener('mouseup', async () => {
      if (!dragging) return;
      dragging = false;
      show(await post('/api/paint', {cells: stroke}));
    });

    document.getElementById('btn-confirm').addEventListener('click', async () => {
      show(await post('/api/confirm'));
    });

    async function reset() {
      stopTimer();
      show(await post('/api/reset'));
    }
    document.getElementById('btn-reset').addEventListener('click', reset);
    window.addEventListener('keydown', (e) => { if (e.key === 'r' || e.key === 'R') reset(); });

    // Selecting an algorithm runs it straight away once the grid is confirmed
    function bindAlgoButtons() {
      document.querySelectorAll('.algo-btn').forEach(btn => {
        btn.addEventListener('click', async () => {
          const state = await call('GET', '/api/state');
          if (state.mode !== 'confirmed') {
            show(await post('/api/algorithm', {algorithm: btn.dataset.algo}));
            return;
          }
          const data = await post('/api/run', {algorithm: btn.dataset.algo});
          show(data);
          if (!data.error) startTimer();
        });
      });
    }
    bindAlgoButtons();

    document.getElementById('btn-next').addEventListener('click', async () => {
      stopTimer();
      show(await post('/api/step/next'));
    });
    document.getElementById('btn-end').addEventListener('click', async () => {
      stopTimer();
      show(await post('/api/step/end'));
    });
    document.getElementById('btn-play').addEventListener('click', async () => {
      const data = await post('/api/step/play');
      interval = data.interval;
      if (data.is_playing) startTimer(); else stopTimer();
    });
    document.getElementById('speed-selector').addEventListener('change', async (e) => {
      const data = await post('/api/config/speed', {speed: e.target.value});
      interval = data.interval;
      if (timer) startTimer();
    });

    document.getElementById('comparison').addEventListener('click', async (e) => {
      if (e.target.id !== 'btn-compare') return;
      const data = await call('GET', '/api/compare');
      if (data.comparison) document.getElementById('comparison').innerHTML = data.comparison;
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    settings = load_settings(argv[0] if argv else None)

    logging.basicConfig(
        level=logging.DEBUG if settings["debug"] else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    app = create_app(settings)
    logger.info("Grid %dx%d, serving on http://%s:%d",
                settings["rows"], settings["cols"], settings["host"], settings["port"])
    app.run(debug=settings["debug"], host=settings["host"], port=settings["port"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
