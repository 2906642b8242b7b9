import asyncio
import logging
from collections.abc import Awaitable, Callable

from .portfolio_agent import PortfolioAgent

log = logging.getLogger(__name__)

AgentFactory = Callable[[], Awaitable[PortfolioAgent]]


class AgentRuntime:
    """Owns the lifetime of one PortfolioAgent.

    The agent is built on first use, so a server can start before
    credentials or the database are available; the first request then
    surfaces the configuration error. Concurrent first requests share a
    single construction.
    """

    def __init__(self, factory: AgentFactory):
        self._factory = factory
        self._agent: PortfolioAgent | None = None
        self._lock = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        return self._agent is not None

    async def get(self) -> PortfolioAgent:
        """Return the agent, building it if needed."""
        if self._agent is not None:
            return self._agent

        async with self._lock:
            if self._agent is None:
                log.info("Initializing portfolio agent")
                self._agent = await self._factory()
        return self._agent

    async def reset(self) -> None:
        """Close the current agent; the next get() builds a fresh one."""
        async with self._lock:
            agent, self._agent = self._agent, None
        if agent is not None:
            await agent.close()
            log.info("Portfolio agent reset")

    async def close(self) -> None:
        await self.reset()
