from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional, Type
from uuid import UUID

from pydantic import BaseModel

from zerox_actions.config import Config
from zerox_actions.runtime.memory import Content, Memory

State = dict[str, Any]
HandlerCallback = Callable[[Content], Awaitable[Any]]


class MemoryManager(ABC):
    """Append-only store of memories for a single table."""

    table_name: str

    @abstractmethod
    async def create_memory(self, memory: Memory) -> None:
        ...


class ObjectGenerator(ABC):
    """Turns a prompt into a best-effort structured object.

    Implementations wrap an LLM. Fields the model cannot fill come back as None.
    """

    @abstractmethod
    async def generate(self, context: str, schema: Type[BaseModel]) -> dict:
        ...


class AgentRuntime(ABC):
    agent_id: UUID
    generator: ObjectGenerator

    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def compose_state(self, message: Memory, additional_keys: Optional[dict] = None) -> State:
        ...

    @abstractmethod
    async def update_recent_message_state(self, state: State) -> State:
        ...

    @abstractmethod
    def memory_manager(self, table_name: str) -> MemoryManager:
        ...


class SettingsRuntime(AgentRuntime, ABC):
    """Runtime whose settings come from the process configuration."""

    def __init__(self, config: Config, agent_id: UUID, generator: ObjectGenerator):
        self.config = config
        self.agent_id = agent_id
        self.generator = generator

    def get_setting(self, key: str) -> Optional[str]:
        value = getattr(self.config, key, None)
        if value in (None, ''):
            return None
        return str(value)
