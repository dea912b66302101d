from gridforge.routes import dungeon_api

SMALL = "rowCount=20&colCount=20&roomCountMin=4&roomCountMax=4"


def test_map_payload(client):
    resp = client.get(f"/api/dungeon/map?seed=42&{SMALL}")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["seed"] == 42
    assert data["width"] == 20 and data["height"] == 20
    assert len(data["grid"]) == 20 and all(len(row) == 20 for row in data["grid"])
    assert data["metrics"]["grids"] == 4
    assert data["grid"][data["entry"]["y"]][data["entry"]["x"]] == "entry"


def test_map_same_seed_is_stable(client):
    a = client.get(f"/api/dungeon/map?seed=123&{SMALL}").get_json()
    dungeon_api._dungeon_cache.clear()
    b = client.get(f"/api/dungeon/map?seed=123&{SMALL}").get_json()
    assert a["grid"] == b["grid"]
    assert a["rooms"] == b["rooms"]


def test_text_seed_is_case_insensitive(client):
    a = client.get(f"/api/dungeon/map?seed=Goblin&{SMALL}").get_json()
    b = client.get(f"/api/dungeon/map?seed=goblin&{SMALL}").get_json()
    assert a["seed"] == b["seed"]
    assert a["grid"] == b["grid"]


def test_unseeded_request_gets_seed(client):
    data = client.get(f"/api/dungeon/map?{SMALL}").get_json()
    assert isinstance(data["seed"], int) and data["seed"] > 0


def test_bad_option_is_400(client):
    resp = client.get("/api/dungeon/map?rowCount=lots")
    assert resp.status_code == 400
    assert "rowCount" in resp.get_json()["error"]


def test_impossible_layout_is_422(client):
    resp = client.get(
        "/api/dungeon/map?seed=3&rowCount=20&colCount=20&roomCountMin=14&roomCountMax=14"
        "&lossyAttempts=1&forcedAttempts=2"
    )
    assert resp.status_code == 422
    assert resp.get_json()["attempts"] == 3


def test_tile_lookup(client):
    data = client.get(f"/api/dungeon/map?seed=42&{SMALL}").get_json()
    ex = data["exit"]
    resp = client.get(f"/api/dungeon/tile?seed=42&{SMALL}&x={ex['x']}&y={ex['y']}")
    assert resp.status_code == 200
    tile = resp.get_json()
    assert tile["type"] == "exit"
    assert tile["walkable"] is True
    assert tile["room"]["type"] == "EXIT"


def test_tile_bad_coords(client):
    assert client.get(f"/api/dungeon/tile?seed=42&{SMALL}&x=a&y=1").status_code == 400
    assert client.get(f"/api/dungeon/tile?seed=42&{SMALL}").status_code == 400
    resp = client.get(f"/api/dungeon/tile?seed=42&{SMALL}&x=20&y=0")
    assert resp.status_code == 404


def test_cache_reuses_instance(client):
    client.get(f"/api/dungeon/map?seed=5&{SMALL}")
    client.get(f"/api/dungeon/tile?seed=5&{SMALL}&x=0&y=0")
    assert len(dungeon_api._dungeon_cache) == 1


def test_cache_evicts_oldest(test_app):
    test_app.config["DUNGEON_CACHE_MAX"] = 2
    client = test_app.test_client()
    for seed in (1, 2, 3):
        client.get(f"/api/dungeon/map?seed={seed}&{SMALL}")
    assert len(dungeon_api._dungeon_cache) == 2
    seeds = {key[-4] for key in dungeon_api._dungeon_cache}
    assert seeds == {2, 3}


def test_cache_disabled(test_app):
    test_app.config["DUNGEON_DISABLE_CACHE"] = True
    test_app.test_client().get(f"/api/dungeon/map?seed=8&{SMALL}")
    assert dungeon_api._dungeon_cache == {}


def test_defaults_endpoint(client):
    data = client.get("/api/dungeon/defaults").get_json()
    assert data["rowCount"] == 32
    assert data["roomCountMax"] == 14


def test_defaults_follow_env(monkeypatch):
    from gridforge import create_app

    monkeypatch.setenv("GRIDFORGE_DEFAULT_ROW_COUNT", "26")
    app = create_app({"TESTING": True})
    data = app.test_client().get("/api/dungeon/defaults").get_json()
    assert data["rowCount"] == 26


def test_seed_endpoint(client):
    assert client.post("/api/dungeon/seed", json={"seed": 77}).get_json()["seed"] == 77
    assert client.post("/api/dungeon/seed", json={"seed": "1234"}).get_json()["seed"] == 1234
    a = client.post("/api/dungeon/seed", json={"seed": "Dragon"}).get_json()["seed"]
    b = client.post("/api/dungeon/seed", json={"seed": "dragon"}).get_json()["seed"]
    assert a == b
    for body in ({}, {"seed": ""}, {"regenerate": True}):
        seed = client.post("/api/dungeon/seed", json=body).get_json()["seed"]
        assert 1 <= seed <= 1_000_000


def test_coerce_seed_bounds():
    assert dungeon_api.coerce_seed(dungeon_api.SEED_MAX + 5) == 5
    assert 0 <= dungeon_api.coerce_seed("some words") < dungeon_api.SEED_MAX
    assert 1 <= dungeon_api.coerce_seed(True) <= 1_000_000
