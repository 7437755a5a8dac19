import logging
from typing import AsyncIterator, Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from relay_hub.config import get_settings
from relay_nodes.registry import list_nodes
from relay_nodes.runtime import Context, run_node
from relay_nodes.schema import ActionResult


router = APIRouter(prefix="/api")

log = logging.getLogger("relay.nodes")


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=get_settings().http_timeout) as http:
        yield http


def get_context(http: httpx.AsyncClient = Depends(get_http_client)) -> Context:
    return Context(http=http, logger=log)


def _reply(result: ActionResult) -> JSONResponse:
    return JSONResponse(result.envelope(), status_code=result.status_code)


@router.get("/nodes")
def api_list_nodes(category: Optional[str] = None):
    return list_nodes(category)


@router.post("/{provider}")
async def api_run_node(provider: str, request: Request, ctx: Context = Depends(get_context)):
    try:
        body = await request.json()
    except ValueError:
        return _reply(ActionResult.failure("Request body must be JSON"))
    if not isinstance(body, dict):
        return _reply(ActionResult.failure("Request body must be a JSON object"))
    result = await run_node(provider, body, ctx)
    return _reply(result)
