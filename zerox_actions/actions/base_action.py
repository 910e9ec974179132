from abc import ABC, abstractmethod
from typing import Any, Optional

from zerox_actions.runtime import AgentRuntime, HandlerCallback, Memory, State


class BaseAction(ABC):
    NAME = 'base_action'
    SIMILES: list[str] = []
    DESCRIPTION = ''
    SUPPRESS_INITIAL_MESSAGE = False
    # Sample conversations shown to the model when it picks an action.
    EXAMPLES: list[list[dict[str, Any]]] = []

    @abstractmethod
    async def validate(self, runtime: AgentRuntime, message: Optional[Memory] = None) -> bool:
        """
        The validate function decides whether the action can run at all for this runtime.
        A False result means the action is not applicable; it is not an error.
        """

    @abstractmethod
    async def handler(
        self,
        runtime: AgentRuntime,
        message: Memory,
        state: Optional[State],
        options: Optional[dict],
        callback: HandlerCallback,
    ) -> Optional[bool]:
        """
        The handler function runs the action for one chat turn.
        Args:
            runtime:AgentRuntime: Settings, state composition, memory and object generation
            message:Memory: The message that triggered the action
            state:Optional[State]: Already composed state, if any
            options:Optional[dict]: Extra options passed by the runtime
            callback:HandlerCallback: Delivers the reply; called at most once

        Returns:
            True on success, False on failure, None when the action stopped to ask for more input.
        """

    def to_dict(self) -> dict:
        return {
            'name': self.NAME,
            'similes': self.SIMILES,
            'description': self.DESCRIPTION,
            'suppress_initial_message': self.SUPPRESS_INITIAL_MESSAGE,
            'examples': self.EXAMPLES,
        }
