from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from scenepanel_core.app import create_app


def _open_session(client: TestClient) -> str:
    r = client.get("/ui")
    assert r.status_code == 200
    return r.url.path.rsplit("/", 1)[-1]


def test_panel_page_renders_forms_and_containers(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("SCENEPANEL_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.get("/ui")
        assert r.status_code == 200
        assert 'id="triangle-add"' in r.text
        assert 'id="text-add"' in r.text
        assert 'id="commandLog"' in r.text
        assert 'id="selector"' in r.text

        css = client.get("/ui/static/ui.css")
        assert css.status_code == 200
        assert ".selected" in css.text


def test_each_page_load_starts_empty(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("SCENEPANEL_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        first = _open_session(client)
        client.post(f"/ui/{first}/forms/triangle-add", data={"x": "0", "y": "0"})

        second = _open_session(client)
        assert second != first
        assert client.get(f"/ui/{second}/state").json() == {
            "log": [],
            "entries": [],
            "selected": None,
        }


def test_submit_select_and_delete_flow(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("SCENEPANEL_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        sid = _open_session(client)

        page = client.post(f"/ui/{sid}/forms/text-add", data={"text": "hello"})
        assert page.status_code == 200
        assert "POST #text-add: 0" in page.text
        assert "text0" in page.text

        client.post(f"/ui/{sid}/forms/triangle-add", data={"x": "0.5", "y": "0.5"})
        state = client.get(f"/ui/{sid}/state").json()
        assert state["log"] == ["POST #text-add: 0", "POST #triangle-add: 1"]
        assert [(e["label"], e["selected"]) for e in state["entries"]] == [
            ("text0", False),
            ("triangle1", True),
        ]
        assert state["entries"][0]["record"]["text"] == "hello"

        text_node = state["entries"][0]["node_id"]
        client.post(f"/ui/{sid}/select/{text_node}")
        state = client.get(f"/ui/{sid}/state").json()
        assert state["selected"] == text_node
        assert [e["selected"] for e in state["entries"]] == [True, False]

        client.post(f"/ui/{sid}/delete")
        state = client.get(f"/ui/{sid}/state").json()
        assert state["log"][-1] == "delete: ok"
        assert [e["label"] for e in state["entries"]] == ["triangle1"]
        assert state["selected"] is None

        drawables = client.get("/drawables").json()["result"]
        assert [d["id"] for d in drawables] == [1]


def test_rejected_submission_is_logged(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("SCENEPANEL_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        sid = _open_session(client)

        client.post(f"/ui/{sid}/forms/text-add", data={"text": ""})
        state = client.get(f"/ui/{sid}/state").json()
        assert state["log"] == ["POST error #text-add: Request validation failed"]
        assert state["entries"] == []


def test_delete_without_selection_changes_nothing(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("SCENEPANEL_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        sid = _open_session(client)

        r = client.post(f"/ui/{sid}/delete")
        assert r.status_code == 200
        assert client.get(f"/ui/{sid}/state").json()["log"] == []


def test_unknown_session_form_and_entry_are_404(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("SCENEPANEL_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        missing = client.get("/ui/not-a-session")
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "not_found"

        sid = _open_session(client)
        assert client.post(f"/ui/{sid}/forms/circle-add", data={}).status_code == 404
        assert client.post(f"/ui/{sid}/select/5").status_code == 404


def test_panel_posts_redirect_with_see_other(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("SCENEPANEL_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        opened = client.get("/ui", follow_redirects=False)
        assert opened.status_code == 302
        sid = opened.headers["location"].rsplit("/", 1)[-1]

        for path in (f"/ui/{sid}/forms/triangle-add", f"/ui/{sid}/delete"):
            r = client.post(path, data={"x": "0", "y": "0"}, follow_redirects=False)
            assert r.status_code == 303
            assert r.headers["location"] == f"/ui/{sid}"
