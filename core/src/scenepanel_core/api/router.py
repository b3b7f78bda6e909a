from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, Form, HTTPException, Request
from pydantic import BaseModel

from scenepanel_core.api.models import ApiResponse, ok
from scenepanel_core.scene import SceneRegistry

router = APIRouter(tags=["scene"])


class DeleteRequest(BaseModel):
    type: Literal["_delete"]
    id: int


def _get_scene(request: Request) -> SceneRegistry:
    scene = getattr(request.app.state, "scene", None)
    if scene is None:
        raise HTTPException(status_code=500, detail="Scene not initialized")
    return scene


@router.post("/add-triangle", response_model=ApiResponse[dict[str, Any]])
async def add_triangle(
    request: Request,
    x: float = Form(default=0.0),
    y: float = Form(default=0.0),
) -> ApiResponse[dict[str, Any]]:
    drawable = _get_scene(request).add_triangle(x=x, y=y)
    return ok(drawable.to_record())


@router.post("/add-text", response_model=ApiResponse[dict[str, Any]])
async def add_text(
    request: Request,
    text: str = Form(..., min_length=1),
    x: float = Form(default=0.0),
    y: float = Form(default=0.0),
    wavy: bool = Form(default=False),
) -> ApiResponse[dict[str, Any]]:
    drawable = _get_scene(request).add_text(text, x=x, y=y, wavy=wavy)
    return ok(drawable.to_record())


@router.put("/delete", response_model=ApiResponse[str])
async def delete_drawable(request: Request, payload: DeleteRequest) -> ApiResponse[str]:
    if not _get_scene(request).remove(payload.id):
        raise HTTPException(status_code=404, detail=f"no drawable with id {payload.id}")
    return ok("ok")


@router.get("/drawables", response_model=ApiResponse[list[dict[str, Any]]])
async def list_drawables(request: Request) -> ApiResponse[list[dict[str, Any]]]:
    return ok([d.to_record() for d in _get_scene(request).list_drawables()])
