from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from scenepanel_core.app import create_app


def test_add_triangle_and_text_return_records(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("SCENEPANEL_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.post("/add-triangle", data={"x": "1.5", "y": "2"})
        assert r.status_code == 200
        assert r.json() == {
            "result": {"type": "triangle", "id": 0, "x": 1.5, "y": 2.0},
            "error": None,
        }

        r2 = client.post("/add-text", data={"text": "hello", "wavy": "true"})
        assert r2.status_code == 200
        result = r2.json()["result"]
        assert result["type"] == "text"
        assert result["id"] == 1
        assert result["text"] == "hello"
        assert result["wavy"] is True

        listed = client.get("/drawables")
        assert listed.status_code == 200
        assert [d["id"] for d in listed.json()["result"]] == [0, 1]


def test_add_text_requires_text(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("SCENEPANEL_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.post("/add-text", data={"text": "", "x": "0"})
        assert r.status_code == 422
        body = r.json()
        assert body["result"] == "Request validation failed"
        assert body["error"]["code"] == "validation_error"


def test_delete_removes_drawable_once(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("SCENEPANEL_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        created = client.post("/add-triangle", data={"x": "0", "y": "0"})
        drawable_id = created.json()["result"]["id"]

        deleted = client.put("/delete", json={"type": "_delete", "id": drawable_id})
        assert deleted.status_code == 200
        assert deleted.json() == {"result": "ok", "error": None}

        again = client.put("/delete", json={"type": "_delete", "id": drawable_id})
        assert again.status_code == 404
        body = again.json()
        assert body["result"] == f"no drawable with id {drawable_id}"
        assert body["error"]["code"] == "not_found"

        assert client.get("/drawables").json()["result"] == []


def test_delete_rejects_other_message_types(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("SCENEPANEL_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        client.post("/add-triangle", data={"x": "0", "y": "0"})

        r = client.put("/delete", json={"type": "triangle", "id": 0})
        assert r.status_code == 422
        assert r.json()["error"]["code"] == "validation_error"
        assert len(client.app.state.scene) == 1
