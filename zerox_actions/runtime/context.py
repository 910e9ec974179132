import re
from typing import Any, Mapping

PLACEHOLDER = re.compile(r'{{\s*(\w+)\s*}}')


def compose_context(state: Mapping[str, Any], template: str) -> str:
    """Render `{{key}}` placeholders from state. Unknown keys become empty strings."""

    def substitute(match: re.Match) -> str:
        value = state.get(match.group(1))
        return '' if value is None else str(value)

    return PLACEHOLDER.sub(substitute, template)
