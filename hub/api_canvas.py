from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Optional

from relay_hub.canvas import Canvas, CanvasError
from relay_hub.client import ProxyClient
from relay_hub.config import get_settings
from relay_hub.models import ActionRequest


router = APIRouter(prefix="/api/canvas")

_canvas = Canvas()


def get_canvas() -> Canvas:
    return _canvas


def get_proxy_client() -> ProxyClient:
    settings = get_settings()
    return ProxyClient(settings.proxy_base_url, timeout=settings.http_timeout)


class NodeIn(BaseModel):
    kind: str
    title: Optional[str] = None
    subtitle: Optional[str] = None


class ConfigIn(BaseModel):
    config: ActionRequest


def _raise(e: CanvasError):
    raise HTTPException(e.status_code, str(e))


@router.get("/nodes")
def list_canvas_nodes(canvas: Canvas = Depends(get_canvas)):
    return [n.view() for n in canvas.nodes.values()]


@router.post("/nodes", status_code=201)
def add_canvas_node(body: NodeIn, canvas: Canvas = Depends(get_canvas)):
    try:
        return canvas.add_node(body.kind, body.title, body.subtitle).view()
    except CanvasError as e:
        _raise(e)


@router.get("/nodes/{node_id}")
def get_canvas_node(node_id: str, canvas: Canvas = Depends(get_canvas)):
    try:
        return canvas.get(node_id).view()
    except CanvasError as e:
        _raise(e)


@router.delete("/nodes/{node_id}")
def remove_canvas_node(node_id: str, canvas: Canvas = Depends(get_canvas)):
    try:
        canvas.remove(node_id)
    except CanvasError as e:
        _raise(e)
    return {"ok": True}


@router.put("/nodes/{node_id}/config")
def configure_canvas_node(node_id: str, body: ConfigIn, canvas: Canvas = Depends(get_canvas)):
    try:
        return canvas.configure(node_id, body.config).view()
    except CanvasError as e:
        _raise(e)


@router.post("/nodes/{node_id}/execute")
async def execute_canvas_node(
    node_id: str,
    canvas: Canvas = Depends(get_canvas),
    client: ProxyClient = Depends(get_proxy_client),
):
    try:
        node = await canvas.execute(node_id, client)
    except CanvasError as e:
        _raise(e)
    return node.view()


@router.post("/run")
async def run_canvas(canvas: Canvas = Depends(get_canvas)):
    return await canvas.run_workflow(get_settings().workflow_run_delay)
