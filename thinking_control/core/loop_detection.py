"""
Planning loop detection for streamed responses.

A reasoning model can get stuck planning: it opens thinking block after
thinking block without ever calling a tool. The detector counts consecutive
thinking block starts within one stream and, once the count reaches the
threshold, produces a corrective system event telling the model to act.

Transition table (one counter per stream session):

    thinking block start  ->  counter += 1; fire if counter >= threshold
    tool-use event        ->  counter = 0
    anything else         ->  no change

There is no "already flagged" state: every thinking block start at or past
the threshold fires again until a tool call resets the counter.
"""

from typing import Iterable, List, Mapping, Optional, Tuple, Union

from thinking_control.config import LOOP_CORRECTION_MESSAGE, LOOP_DETECTION_THRESHOLD
from .events import StreamEvent, create_corrective_event
from .exceptions import ConfigurationError

EventLike = Union[StreamEvent, Mapping]


class LoopDetector:
    """
    Per-stream counter of thinking blocks unbroken by tool use.

    Create one instance per streaming session and discard it when the
    stream ends; instances are never shared between streams.

    Example:
        >>> detector = LoopDetector(threshold=2)
        >>> thinking = {"type": "content_block_start", "content_block": {"type": "thinking"}}
        >>> detector.observe(thinking) is None
        True
        >>> detector.observe(thinking).data["content"]
        'Planning loop detected. Execute action now.'
    """

    def __init__(self, threshold: int = LOOP_DETECTION_THRESHOLD, message: str = LOOP_CORRECTION_MESSAGE):
        """
        Args:
            threshold: Consecutive thinking blocks that trigger a correction
            message: Content of the corrective system event

        Raises:
            ConfigurationError: If threshold is below 1
        """
        if threshold < 1:
            raise ConfigurationError(f"Loop detection threshold must be >= 1, got {threshold}")

        self.threshold = threshold
        self.message = message
        self._consecutive_reasoning_blocks = 0
        self._corrections_emitted = 0

    @property
    def consecutive_reasoning_blocks(self) -> int:
        return self._consecutive_reasoning_blocks

    @property
    def corrections_emitted(self) -> int:
        """Corrective events produced so far in this session."""
        return self._corrections_emitted

    def reset(self) -> None:
        self._consecutive_reasoning_blocks = 0

    def observe(self, event: EventLike) -> Optional[StreamEvent]:
        """
        Update the counter for one event.

        Args:
            event: StreamEvent or decoded wire event dict

        Returns:
            A corrective system event if the threshold was reached, else None
        """
        event = StreamEvent.coerce(event)

        if event.is_tool_use:
            self._consecutive_reasoning_blocks = 0
            return None

        if event.is_thinking_block_start:
            self._consecutive_reasoning_blocks += 1
            if self._consecutive_reasoning_blocks >= self.threshold:
                self._corrections_emitted += 1
                return create_corrective_event(self.message)

        return None


def fold_stream(events: Iterable[EventLike],
                threshold: int = LOOP_DETECTION_THRESHOLD) -> Tuple[int, List[StreamEvent]]:
    """
    Run a complete event sequence through a fresh detector.

    Args:
        events: Finished event sequence
        threshold: Loop detection threshold

    Returns:
        (final counter value, corrective events in emission order)
    """
    detector = LoopDetector(threshold=threshold)
    corrections = []
    for event in events:
        correction = detector.observe(event)
        if correction is not None:
            corrections.append(correction)
    return detector.consecutive_reasoning_blocks, corrections
