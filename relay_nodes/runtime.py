import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from .errors import ProxyError
from .exec_http import exec_action
from .registry import get_provider
from .schema import ActionResult


def utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Context:
    def __init__(self, http, logger: Optional[logging.Logger] = None, clock: Optional[Callable[[], str]] = None):
        self.http = http
        self.log = logger or logging.getLogger("relay.nodes")
        self.clock = clock or utc_timestamp

    def now(self) -> str:
        return self.clock()


async def run_node(provider_name: str, params: Dict[str, Any], ctx: Context) -> ActionResult:
    """Run one provider action and fold every outcome into the envelope.

    Proxy errors keep their own status (400 for local validation, the provider's
    status for upstream failures). Anything else is logged and reported as a 500.
    """
    try:
        provider = get_provider(provider_name)
        data = await exec_action(provider, params, ctx)
    except ProxyError as e:
        ctx.log.warning("%s proxy error (%s): %s", provider_name, e.status_code, e.message)
        return ActionResult.failure(e.message, e.status_code)
    except Exception:
        ctx.log.exception("%s API proxy error", provider_name)
        return ActionResult.failure("Internal server error", 500)
    return ActionResult.ok(data)
