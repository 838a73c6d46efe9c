"""
Stream event model for the response side of the pipeline.

Events mirror the streamed messages API: each has a ``type`` tag and a
payload. Only two shapes matter to loop detection:

- ``content_block_start`` events, whose ``content_block.type`` says what the
  new block is (``thinking``, ``text``, ``tool_use``, ...)
- tool-use events (a bare ``tool_use`` tag, or a block start for a tool)

Everything else is opaque and passes through unchanged.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union


class EventType(str, Enum):
    """Stream event tags the pipeline understands."""

    CONTENT_BLOCK_START = "content_block_start"
    TOOL_USE = "tool_use"

    # Injected by the pipeline itself
    SYSTEM_MESSAGE = "system_message"


class BlockType(str, Enum):
    """Content block discriminators carried by ``content_block_start``."""

    THINKING = "thinking"
    REDACTED_THINKING = "redacted_thinking"
    TEXT = "text"
    TOOL_USE = "tool_use"
    SERVER_TOOL_USE = "server_tool_use"


_TOOL_BLOCK_TYPES = frozenset({BlockType.TOOL_USE.value, BlockType.SERVER_TOOL_USE.value})


@dataclass
class StreamEvent:
    """One event from the response stream.

    Attributes:
        type: Event tag (e.g. "content_block_start")
        data: Event payload, everything except the tag
    """
    type: str
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> 'StreamEvent':
        """Build from a decoded wire event (``{"type": ..., **payload}``)."""
        payload = {key: value for key, value in raw.items() if key != 'type'}
        return cls(type=str(raw.get('type', '')), data=payload)

    @classmethod
    def coerce(cls, event: Union['StreamEvent', Mapping[str, Any]]) -> 'StreamEvent':
        if isinstance(event, StreamEvent):
            return event
        return cls.from_dict(event)

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation: the tag merged into the payload."""
        return {'type': self.type, **self.data}

    @property
    def block_type(self) -> Optional[str]:
        """Block discriminator of a ``content_block_start`` event, else None."""
        if self.type != EventType.CONTENT_BLOCK_START.value:
            return None
        block = self.data.get('content_block')
        if isinstance(block, Mapping):
            block_type = block.get('type')
            return str(block_type) if block_type is not None else None
        return None

    @property
    def is_thinking_block_start(self) -> bool:
        return self.block_type == BlockType.THINKING.value

    @property
    def is_tool_use(self) -> bool:
        if self.type == EventType.TOOL_USE.value:
            return True
        return self.block_type in _TOOL_BLOCK_TYPES


def create_corrective_event(content: str) -> StreamEvent:
    """Create the system-role event injected when a planning loop is detected."""
    return StreamEvent(
        type=EventType.SYSTEM_MESSAGE.value,
        data={'role': 'system', 'content': content}
    )
