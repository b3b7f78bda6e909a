from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from scenepanel_core.ui.controller import PanelController
from scenepanel_core.ui.document import LIST_CONTAINER_ID, LOG_CONTAINER_ID, ElementNotFoundError
from scenepanel_core.ui.forms import UnknownFormError
from scenepanel_core.ui.messages import DeleteRequested, EntrySelected, PanelMessage, SubmitForm
from scenepanel_core.ui.sessions import PanelSessions

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(prefix="/ui", tags=["ui"])


def _get_sessions(request: Request) -> PanelSessions:
    sessions = getattr(request.app.state, "panel_sessions", None)
    if sessions is None:
        raise HTTPException(status_code=500, detail="Panel sessions not initialized")
    return sessions


def _get_controller(request: Request, session_id: str) -> PanelController:
    try:
        return _get_sessions(request).get(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Panel session not found") from None


async def _dispatch(request: Request, session_id: str, message: PanelMessage) -> RedirectResponse:
    controller = _get_controller(request, session_id)
    try:
        await controller.dispatch(message)
    except (ElementNotFoundError, UnknownFormError) as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return RedirectResponse(url=f"/ui/{session_id}", status_code=303)


@router.get("")
async def ui_open(request: Request) -> RedirectResponse:
    session_id = _get_sessions(request).open()
    return RedirectResponse(url=f"/ui/{session_id}", status_code=302)


@router.get("/{session_id}", response_class=HTMLResponse)
async def ui_panel(request: Request, session_id: str) -> HTMLResponse:
    controller = _get_controller(request, session_id)
    state = controller.snapshot()

    ctx: dict[str, Any] = {
        "title": "Scene Panel",
        "session_id": session_id,
        "forms": list(_get_sessions(request).forms),
        "log_lines": state["log"],
        "entries": state["entries"],
        "log_container_id": LOG_CONTAINER_ID,
        "list_container_id": LIST_CONTAINER_ID,
    }
    return templates.TemplateResponse(request, "panel.html", ctx)


@router.get("/{session_id}/state")
async def ui_state(request: Request, session_id: str) -> JSONResponse:
    return JSONResponse(_get_controller(request, session_id).snapshot())


@router.post("/{session_id}/forms/{form_name}")
async def ui_submit_form(request: Request, session_id: str, form_name: str) -> RedirectResponse:
    form_data = await request.form()
    fields = {k: v for k, v in form_data.items() if isinstance(v, str)}
    return await _dispatch(request, session_id, SubmitForm(f"#{form_name}", fields))


@router.post("/{session_id}/select/{node_id}")
async def ui_select(request: Request, session_id: str, node_id: int) -> RedirectResponse:
    return await _dispatch(request, session_id, EntrySelected(node_id))


@router.post("/{session_id}/delete")
async def ui_delete(request: Request, session_id: str) -> RedirectResponse:
    return await _dispatch(request, session_id, DeleteRequested())
