from __future__ import annotations

from typing import Any, Iterator, Optional

from loguru import logger

from ..entities import PlayerAgent, ZombieAgent
from ..models import AgentHandle


class AgentRegistry:
    """Owns every live agent; back references elsewhere are plain handles.

    Lookups of removed handles return None, so a target or signaling source
    that died simply stops resolving.
    """

    def __init__(self) -> None:
        self._agents: dict[AgentHandle, Any] = {}
        self._next_handle = 1
        self.player_handle: Optional[AgentHandle] = None

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, handle: object) -> bool:
        return handle in self._agents

    def register(self, agent: Any) -> AgentHandle:
        handle = AgentHandle(self._next_handle)
        self._next_handle += 1
        agent.handle = handle
        self._agents[handle] = agent
        if isinstance(agent, PlayerAgent):
            if self.player_handle is not None:
                logger.warning(
                    f"Replacing player handle {self.player_handle} with {handle}"
                )
            self.player_handle = handle
        return handle

    def remove(self, handle: AgentHandle) -> Any | None:
        agent = self._agents.pop(handle, None)
        if handle == self.player_handle:
            self.player_handle = None
        return agent

    def get(self, handle: Optional[AgentHandle]) -> Any | None:
        if handle is None:
            return None
        return self._agents.get(handle)

    def get_zombie(self, handle: Optional[AgentHandle]) -> ZombieAgent | None:
        agent = self.get(handle)
        return agent if isinstance(agent, ZombieAgent) else None

    @property
    def player(self) -> PlayerAgent | None:
        return self.get(self.player_handle)

    def zombies(self) -> Iterator[ZombieAgent]:
        for agent in list(self._agents.values()):
            if isinstance(agent, ZombieAgent) and agent.alive:
                yield agent

    def zombie_handles(self) -> list[AgentHandle]:
        return [zombie.handle for zombie in self.zombies() if zombie.handle is not None]

    def resolve_signaling_source(self, zombie: ZombieAgent) -> ZombieAgent | None:
        """The zombie that signaled *zombie*; a handle that stopped resolving is cleared."""
        if zombie.signaling_source is None:
            return None
        source = self.get_zombie(zombie.signaling_source)
        if source is None:
            logger.debug(
                f"Zombie {zombie.handle} lost its signaling source "
                f"{zombie.signaling_source}"
            )
            zombie.signaling_source = None
        return source
