import pytest

from main import create_app
from settings import DEFAULT_SETTINGS


@pytest.fixture
def client():
    app = create_app({**DEFAULT_SETTINGS, "rows": 5, "cols": 5})
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def configure(client, start=(0, 0), goal=(4, 4), walls=()):
    client.post("/api/paint", json={"row": start[0], "col": start[1]})
    client.post("/api/paint", json={"row": goal[0], "col": goal[1]})
    if walls:
        client.post("/api/paint", json={"cells": [list(w) for w in walls]})
    return client.post("/api/confirm")


def test_index_renders(client):
    resp = client.get("/")
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "<svg" in body
    assert 'data-algo="astar"' in body
    assert body.index('data-algo="astar"') < body.index('data-algo="greedy"')


def test_initial_state(client):
    data = client.get("/api/state").get_json()
    assert data["mode"] == "awaiting_start"
    assert data["grid"]["rows"] == 5
    assert data["algorithm"] == "astar"


def test_paint_walkthrough(client):
    data = client.post("/api/paint", json={"row": 1, "col": 1}).get_json()
    assert data["mode"] == "awaiting_goal"
    assert data["changed"] == 1
    data = client.post("/api/paint", json={"row": 1, "col": 1}).get_json()
    assert data["changed"] == 0
    assert data["mode"] == "awaiting_goal"
    data = client.post("/api/paint", json={"row": 3, "col": 3}).get_json()
    assert data["mode"] == "painting_barriers"
    assert data["can_confirm"]


def test_paint_requires_coordinates(client):
    resp = client.post("/api/paint", json={})
    assert resp.status_code == 400


def test_out_of_bounds_paint(client):
    resp = client.post("/api/paint", json={"row": 9, "col": 0})
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "out_of_bounds"


def test_confirm_too_early(client):
    resp = client.post("/api/confirm")
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "invalid_configuration"


def test_run_before_confirm(client):
    resp = client.post("/api/run", json={})
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "not_confirmed"


def test_unknown_algorithm(client):
    resp = client.post("/api/algorithm", json={"algorithm": "bogus"})
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "unknown_algorithm"


def test_select_algorithm(client):
    data = client.post("/api/algorithm", json={"algorithm": "dfs"}).get_json()
    assert data["algorithm"] == "dfs"
    assert 'class="algo-btn selected" data-algo="dfs"' in data["algo_selector"]


def test_run_and_step(client):
    assert configure(client).status_code == 200
    data = client.post("/api/run", json={"algorithm": "bfs"}).get_json()
    assert data["frames_shown"] == 0
    assert data["label"] == "Breadth-First Search"

    data = client.post("/api/step/next").get_json()
    assert data["frames_shown"] == 1
    assert data["frame"]["kind"] == "visit"
    assert data["frame"]["position"] == [0, 0]

    data = client.post("/api/step/end").get_json()
    assert data["finished"]
    assert data["frame"]["kind"] == "path"
    assert data["frame"]["is_last"]
    assert data["run"]["path_length"] == 9
    assert data["run"]["status"] == "found"


def test_switching_algorithm_mid_run(client):
    configure(client)
    client.post("/api/run", json={"algorithm": "bfs"})
    client.post("/api/step/next")
    data = client.post("/api/run", json={"algorithm": "dfs"}).get_json()
    assert data["run"]["algorithm"] == "dfs"
    assert data["frames_shown"] == 0


def test_no_path_run(client):
    configure(client, walls=[(3, 4), (4, 3), (3, 3)])
    client.post("/api/run", json={})
    data = client.post("/api/step/end").get_json()
    assert data["run"]["status"] == "not_found"
    assert data["run"]["path_length"] == 0


def test_play_and_speed(client):
    configure(client)
    client.post("/api/run", json={})
    data = client.post("/api/step/play").get_json()
    assert data["is_playing"]
    data = client.post("/api/config/speed", json={"speed": "turbo"}).get_json()
    assert data["speed"] == "turbo"
    assert data["interval"] == 0.01


def test_reset(client):
    configure(client)
    client.post("/api/run", json={})
    data = client.post("/api/reset").get_json()
    assert data["mode"] == "awaiting_start"
    assert data["grid"]["start"] is None
    assert data["run"] is None


def test_compare(client):
    assert client.get("/api/compare").status_code == 400
    configure(client)
    data = client.get("/api/compare").get_json()
    keys = [r["algo_key"] for r in data["results"]]
    assert keys == ["astar", "dijkstra", "bfs", "dfs", "greedy"]
    assert "<table>" in data["comparison"]


@pytest.mark.parametrize("payload", [
    {"row": "a", "col": 1},
    {"row": 1.5, "col": 1},
    {"row": True, "col": 1},
    {"cells": [[1]]},
    {"cells": [1, 2]},
    {"cells": "1,2"},
    [1, 2],
])
def test_malformed_paint_is_rejected(client, payload):
    resp = client.post("/api/paint", json=payload)
    assert resp.status_code == 400
    assert "error" in resp.get_json()
    assert client.get("/api/state").get_json()["mode"] == "awaiting_start"


def test_unknown_speed_falls_back(client):
    data = client.post("/api/config/speed", json={"speed": "warp"}).get_json()
    assert data["speed"] == "medium"
    assert data["interval"] == 0.05


def test_workspace_store_is_bounded():
    app = create_app({**DEFAULT_SETTINGS, "rows": 5, "cols": 5, "max_workspaces": 3})
    store = app.extensions["gridsearch.workspaces"]
    for _ in range(10):
        # a fresh client carries no session cookie
        app.test_client().get("/api/state")
    assert len(store) == 3


def test_recent_workspace_survives_eviction():
    app = create_app({**DEFAULT_SETTINGS, "rows": 5, "cols": 5, "max_workspaces": 2})
    kept = app.test_client()
    kept.post("/api/paint", json={"row": 1, "col": 1})
    app.test_client().get("/api/state")
    kept.get("/api/state")              # now the most recently used
    app.test_client().get("/api/state")
    data = kept.get("/api/state").get_json()
    assert data["grid"]["start"] == [1, 1]
    assert len(app.extensions["gridsearch.workspaces"]) == 2
