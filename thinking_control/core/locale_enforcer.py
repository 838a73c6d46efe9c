"""
Output language enforcement.

Some reasoning models drift into another language when the prompt is
ambiguous or carries foreign-language context. The enforcer prepends a
"respond in English" directive to the system prompt, or to the first user
message when there is no system prompt, keeping the content shape
(string vs content blocks) intact.
"""

from typing import List, Optional, Sequence

from thinking_control.config import ENGLISH_INSTRUCTION, FORCE_ENGLISH
from .messages import (
    ROLE_SYSTEM,
    ROLE_USER,
    Message,
    clone_messages,
    find_first_by_role,
    prepend_text
)


class LocaleEnforcer:
    """
    Injects the English-only directive into outgoing messages.

    Example:
        >>> enforcer = LocaleEnforcer()
        >>> enforcer.inject_instruction([{"role": "user", "content": "Hi"}])[0]["content"].endswith("Hi")
        True
    """

    def __init__(self, force_english: bool = FORCE_ENGLISH, instruction: str = ENGLISH_INSTRUCTION):
        """
        Args:
            force_english: Default for inject_instruction when ``enabled`` is not given
            instruction: Directive text to prepend
        """
        self.force_english = force_english
        self.instruction = instruction

    def inject_instruction(self,
                           messages: Sequence[Message],
                           enabled: Optional[bool] = None) -> List[Message]:
        """
        Inject the directive into a copy of the messages.

        Strategy:
            1. Prepend to the first system message (preferred)
            2. Otherwise prepend to the first user message
            3. Otherwise leave the copy unchanged

        Args:
            messages: Messages to modify (never mutated)
            enabled: Override for ``force_english``

        Returns:
            The input object itself when disabled, otherwise a modified copy
        """
        if enabled is None:
            enabled = self.force_english

        if not enabled:
            return messages

        modified = clone_messages(messages)

        index = self.target_index(modified)
        if index >= 0:
            prepend_text(modified[index], self.instruction)

        return modified

    @staticmethod
    def target_index(messages: Sequence[Message]) -> int:
        """Index of the message that receives the directive, or -1 if none."""
        for role in (ROLE_SYSTEM, ROLE_USER):
            index = find_first_by_role(messages, role)
            if index >= 0:
                return index
        return -1
