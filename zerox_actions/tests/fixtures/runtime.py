from typing import Optional, Type
from uuid import UUID, uuid4

import pytest
from pydantic import BaseModel

from zerox_actions.runtime import (
    Content,
    Memory,
    MemoryManager,
    ObjectGenerator,
    SettingsRuntime,
    State,
)

AGENT_ID = UUID('00000000-0000-0000-0000-00000000a9e7')


class InMemoryMemoryManager(MemoryManager):
    def __init__(self, table_name: str):
        self.table_name = table_name
        self.memories: list[Memory] = []

    async def create_memory(self, memory: Memory) -> None:
        self.memories.append(memory)


class StubGenerator(ObjectGenerator):
    """Returns a canned object and remembers what it was asked."""

    def __init__(self, obj: Optional[dict] = None):
        self.obj = obj or {}
        self.calls: list[tuple[str, Type[BaseModel]]] = []

    async def generate(self, context: str, schema: Type[BaseModel]) -> dict:
        self.calls.append((context, schema))
        return self.obj


class FakeRuntime(SettingsRuntime):
    def __init__(self, config, generator: ObjectGenerator):
        super().__init__(config=config, agent_id=AGENT_ID, generator=generator)
        self.tables: dict[str, InMemoryMemoryManager] = {}

    async def compose_state(self, message: Memory, additional_keys: Optional[dict] = None) -> State:
        return {
            'roomId': str(message.room_id),
            'agentName': 'tester',
            'recentMessages': message.content.text,
            **(additional_keys or {}),
        }

    async def update_recent_message_state(self, state: State) -> State:
        return dict(state)

    def memory_manager(self, table_name: str) -> InMemoryMemoryManager:
        return self.tables.setdefault(table_name, InMemoryMemoryManager(table_name))


class CallbackRecorder:
    def __init__(self):
        self.responses: list[Content] = []

    async def __call__(self, content: Content) -> None:
        self.responses.append(content)


@pytest.fixture()
def generator() -> StubGenerator:
    return StubGenerator()


@pytest.fixture()
def runtime(config, generator) -> FakeRuntime:
    return FakeRuntime(config, generator)


@pytest.fixture()
def callback() -> CallbackRecorder:
    return CallbackRecorder()


@pytest.fixture()
def message() -> Memory:
    return Memory(
        room_id=uuid4(),
        user_id=uuid4(),
        content=Content(text="What's the price of 2 ETH in USDC on Optimism?"),
    )
