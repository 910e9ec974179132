from zerox_actions.runtime.interfaces import (
    AgentRuntime,
    HandlerCallback,
    MemoryManager,
    ObjectGenerator,
    SettingsRuntime,
    State,
)
from zerox_actions.runtime.memory import Content, Memory
from zerox_actions.runtime.context import compose_context

__all__ = [
    'AgentRuntime',
    'HandlerCallback',
    'MemoryManager',
    'ObjectGenerator',
    'SettingsRuntime',
    'State',
    'Content',
    'Memory',
    'compose_context',
]
