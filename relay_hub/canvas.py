from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field

from .client import ProxyClient
from .models import PROVIDER_TITLES, ActionRequest


log = logging.getLogger("relay.canvas")


class CanvasError(Exception):
	status_code = 400


class UnknownNode(CanvasError):
	status_code = 404


class NodeNotReady(CanvasError):
	status_code = 409


class NodeStatus(str, Enum):
	UNCONFIGURED = "unconfigured"
	CONFIGURED = "configured"
	EXECUTING = "executing"


class LastExecution(BaseModel):
	status: Literal["success", "error"]
	message: str
	timestamp: datetime


class CanvasNode(BaseModel):
	id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
	kind: str
	title: str
	subtitle: Optional[str] = None
	config: Optional[ActionRequest] = None
	is_configured: bool = False
	is_executing: bool = False
	last_execution: Optional[LastExecution] = None

	@property
	def status(self) -> NodeStatus:
		if self.is_executing:
			return NodeStatus.EXECUTING
		if self.is_configured:
			return NodeStatus.CONFIGURED
		return NodeStatus.UNCONFIGURED

	@property
	def can_execute(self) -> bool:
		return self.status is NodeStatus.CONFIGURED

	def configure(self, config: ActionRequest) -> None:
		if config.kind != self.kind:
			raise CanvasError(f"{self.title} node cannot take a {config.kind} configuration")
		self.config = config
		self.is_configured = True

	def view(self) -> dict:
		d = self.model_dump(mode="json", exclude={"config"})
		d["status"] = self.status.value
		d["config"] = self.config.payload() if self.config else None
		return d


class Canvas:
	"""Nodes currently on the board. Lives as long as the process does."""

	def __init__(self):
		self.nodes: dict[str, CanvasNode] = {}

	def add_node(self, kind: str, title: str | None = None, subtitle: str | None = None) -> CanvasNode:
		if kind not in PROVIDER_TITLES:
			raise CanvasError(f"Unknown node type: {kind}")
		node = CanvasNode(kind=kind, title=title or PROVIDER_TITLES[kind], subtitle=subtitle)
		self.nodes[node.id] = node
		return node

	def get(self, node_id: str) -> CanvasNode:
		node = self.nodes.get(node_id)
		if node is None:
			raise UnknownNode(f"Node {node_id} not found")
		return node

	def remove(self, node_id: str) -> None:
		self.get(node_id)
		del self.nodes[node_id]

	def configure(self, node_id: str, config: ActionRequest) -> CanvasNode:
		node = self.get(node_id)
		node.configure(config)
		return node

	async def execute(self, node_id: str, client: ProxyClient) -> CanvasNode:
		node = self.get(node_id)
		if not node.is_configured or node.config is None:
			raise NodeNotReady(f"Please configure the {node.title} node first")
		if node.is_executing:
			raise NodeNotReady(f"{node.title} node is already executing")

		# gate is set before the first await so a second execute is refused
		node.is_executing = True
		config = node.config
		provider_title = PROVIDER_TITLES[node.kind]
		try:
			result = await client.invoke(config)
			if result.success:
				outcome = LastExecution(
					status="success",
					message=f"{provider_title} {config.action_label} completed successfully",
					timestamp=datetime.now(timezone.utc),
				)
			else:
				outcome = LastExecution(
					status="error",
					message=result.error or "Unknown error occurred",
					timestamp=datetime.now(timezone.utc),
				)
		except Exception as e:
			log.exception("node %s execute failed", node.id)
			outcome = LastExecution(
				status="error",
				message=f"Failed to {config.action_label} {provider_title}: {e}",
				timestamp=datetime.now(timezone.utc),
			)
		finally:
			node.is_executing = False
		node.last_execution = outcome
		return node

	async def run_workflow(self, delay: float) -> dict:
		"""Pretend to run the board: wait, then report. Nodes are neither called nor touched."""
		started = datetime.now(timezone.utc)
		await asyncio.sleep(delay)
		return {
			"status": "completed",
			"nodeCount": len(self.nodes),
			"startedAt": started.isoformat(),
			"completedAt": datetime.now(timezone.utc).isoformat(),
		}
