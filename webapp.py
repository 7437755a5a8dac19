from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from hub.api_canvas import router as canvas_router
from hub.api_nodes import router as nodes_router
from hub.api_webhooks import router as webhooks_router
from relay_hub.config import get_settings
from relay_hub.logging_utils import setup_logger


# Load local environment variables for development parity
load_dotenv(override=True)

settings = get_settings()
logger = setup_logger(settings.log_level, settings.log_file)

app = FastAPI(
	title="Relay Hub",
	description="Node canvas backend: one thin proxy per third-party action, plus webhook receivers.",
)

# CORS for the canvas frontend
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_origins,
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

# Multi-segment routes first; the proxy router owns POST /api/{provider}
app.include_router(webhooks_router)
app.include_router(canvas_router)
app.include_router(nodes_router)


@app.get("/health")
async def health():
	# Lightweight liveness endpoint
	return {"status": "ok"}
