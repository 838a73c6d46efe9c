"""
Message helpers for chat request payloads.

Messages are plain mappings as they appear in the request body:
``{"role": "user", "content": "..."}`` where ``content`` is either a string
or a list of content blocks (``{"type": "text", "text": "..."}``,
``{"type": "image", ...}``, ...). Only text blocks are interpreted here;
every other key and block type passes through untouched.
"""

import copy
from typing import Any, Dict, List, Optional, Sequence

ROLE_SYSTEM = "system"
ROLE_USER = "user"

Message = Dict[str, Any]
ContentBlock = Dict[str, Any]


def extract_text(content: Any) -> str:
    """
    Extract plain text from message content.

    Args:
        content: A string, a list of content blocks, or anything else

    Returns:
        The string itself, the text blocks joined with spaces, or "" for
        any other shape
    """
    if isinstance(content, str):
        return content

    if isinstance(content, list):
        return ' '.join(
            str(block.get('text') or '')
            for block in content
            if isinstance(block, dict) and block.get('type') == 'text'
        )

    return ''


def collect_user_text(messages: Optional[Sequence[Message]]) -> str:
    """Join the text of every user message with spaces, lower-cased."""
    if not messages:
        return ''

    return ' '.join(
        extract_text(message.get('content'))
        for message in messages
        if isinstance(message, dict) and message.get('role') == ROLE_USER
    ).lower()


def clone_message(message: Message) -> Message:
    """
    Structural copy of one message.

    The message dict and its content list are new objects, and each block
    dict is copied so nested values can be changed without reaching the
    caller's data.
    """
    cloned = {key: copy.deepcopy(value) for key, value in message.items() if key != 'content'}
    if 'content' in message:
        content = message['content']
        if isinstance(content, list):
            cloned['content'] = [copy.deepcopy(block) for block in content]
        else:
            cloned['content'] = copy.deepcopy(content)
    return cloned


def clone_messages(messages: Sequence[Message]) -> List[Message]:
    """Structural copy of a message list (see clone_message)."""
    return [clone_message(message) if isinstance(message, dict) else copy.deepcopy(message)
            for message in messages]


def find_first_by_role(messages: Sequence[Message], role: str) -> int:
    """Index of the first message with ``role``, or -1."""
    for index, message in enumerate(messages):
        if isinstance(message, dict) and message.get('role') == role:
            return index
    return -1


def prepend_text(message: Message, text: str) -> bool:
    """
    Prepend a directive to a message in place.

    String content becomes ``"{text}\\n\\n{content}"``; block content gets a
    new text block at index 0. Other content shapes are left alone.

    Returns:
        True if the message was modified
    """
    content = message.get('content')

    if isinstance(content, str):
        message['content'] = f"{text}\n\n{content}"
        return True

    if isinstance(content, list):
        content.insert(0, {'type': 'text', 'text': text})
        return True

    return False
