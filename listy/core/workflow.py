from __future__ import annotations

import logging
import time
from typing import List

from .workflow_types import SessionContext

logger = logging.getLogger(__name__)


class WorkflowRunner:
    """Runs discovery nodes in order over one session context."""

    def __init__(self, nodes: List):
        self.nodes = nodes

    async def run(self, ctx: SessionContext) -> SessionContext:
        for node in self.nodes:
            started = time.perf_counter()
            ctx = await node.run(ctx)
            logger.debug(
                "session %s: %s done in %.1f ms",
                ctx.session_id,
                getattr(node, "name", type(node).__name__),
                (time.perf_counter() - started) * 1000,
            )
        return ctx
