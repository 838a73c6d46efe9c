"""
Task classification for user prompts.

Labels a conversation as reasoning (planning, design, analysis), execution
(implementation, fixes, running things) or mixed, using fast deterministic
keyword matching over the user's turns. The label feeds the thinking budget
decision: ties and prompts without any signal fall back to mixed, which keeps
thinking enabled at the default budget.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from . import lexicon
from .messages import Message, collect_user_text

TEXT_PREVIEW_LENGTH = 100


class TaskType(str, Enum):
    """Coarse intent of a conversational turn"""
    REASONING = "reasoning"    # Planning, design, analysis
    EXECUTION = "execution"    # Implementation, fixes, debugging
    MIXED = "mixed"            # Ambiguous, both, or no signal


DEFAULT_REASONING_KEYWORDS = (
    'plan', 'design', 'analyze', 'architecture', 'strategy',
    'approach', 'consider', 'evaluate', 'research', 'explore',
    'brainstorm', 'think about', 'pros and cons', 'alternatives',
    'compare', 'recommend', 'assess', 'review', 'investigate',
    'solve',
)

DEFAULT_EXECUTION_KEYWORDS = (
    'fix', 'implement', 'debug', 'refactor', 'optimize',
    'add', 'remove', 'update', 'create', 'delete',
    'change', 'modify', 'replace', 'move', 'rename',
    'test', 'run', 'execute', 'deploy', 'build',
    'list',
)


@dataclass(frozen=True)
class ClassificationDetails:
    """Read-only view of a classification, for diagnostics only.

    Attributes:
        type: Resulting task type
        reasoning_score: Number of reasoning keywords found
        execution_score: Number of execution keywords found
        text_length: Length of the combined lower-cased user text
        text_preview: First 100 characters, with "..." when truncated
    """
    type: TaskType
    reasoning_score: int
    execution_score: int
    text_length: int
    text_preview: str

    def to_dict(self) -> dict:
        return {
            'task_type': self.type.value,
            'reasoning_score': self.reasoning_score,
            'execution_score': self.execution_score,
            'text_length': self.text_length,
            'text_preview': self.text_preview,
        }


def _decide(reasoning_score: int, execution_score: int) -> TaskType:
    if reasoning_score > execution_score:
        return TaskType.REASONING
    if execution_score > reasoning_score:
        return TaskType.EXECUTION
    return TaskType.MIXED


def _preview(text: str) -> str:
    if len(text) > TEXT_PREVIEW_LENGTH:
        return text[:TEXT_PREVIEW_LENGTH] + '...'
    return text


class TaskClassifier:
    """
    Classifies messages as reasoning, execution, or mixed tasks.

    Example:
        >>> classifier = TaskClassifier()
        >>> classifier.classify([{"role": "user", "content": "Plan the architecture"}])
        <TaskType.REASONING: 'reasoning'>
    """

    def __init__(self, custom_keywords: Optional[Dict[str, Iterable[str]]] = None):
        """
        Initialize the classifier.

        Args:
            custom_keywords: Optional mapping with "reasoning" and/or
                "execution" keys; each given list replaces the default set
        """
        self.keywords: Dict[str, List[str]] = {
            TaskType.REASONING.value: list(DEFAULT_REASONING_KEYWORDS),
            TaskType.EXECUTION.value: list(DEFAULT_EXECUTION_KEYWORDS),
        }

        if custom_keywords:
            for category, words in custom_keywords.items():
                self.keywords[category] = list(words)

    def extend_keywords(self,
                        reasoning: Iterable[str] = (),
                        execution: Iterable[str] = ()) -> None:
        """Append extra keywords to the current sets (duplicates are skipped)."""
        for category, words in ((TaskType.REASONING.value, reasoning),
                                (TaskType.EXECUTION.value, execution)):
            current = self.keywords.setdefault(category, [])
            for word in words:
                if word not in current:
                    current.append(word)

    def _scores(self, text: str) -> tuple:
        reasoning_score = lexicon.score(text, self.keywords.get(TaskType.REASONING.value, ()))
        execution_score = lexicon.score(text, self.keywords.get(TaskType.EXECUTION.value, ()))
        return reasoning_score, execution_score

    def classify(self, messages: Optional[Sequence[Message]]) -> TaskType:
        """
        Classify messages as reasoning, execution, or mixed.

        Only user messages are read; system and assistant turns are ignored.

        Args:
            messages: Chat messages (string or content-block content)

        Returns:
            TaskType.MIXED when there is no user text or the scores tie,
            otherwise the category with the strictly higher score
        """
        text = collect_user_text(messages)

        if not text.strip():
            return TaskType.MIXED

        return _decide(*self._scores(text))

    def classify_with_details(self, messages: Optional[Sequence[Message]]) -> ClassificationDetails:
        """
        Classify and report the raw scores (for debugging).

        Args:
            messages: Chat messages

        Returns:
            ClassificationDetails with scores and a truncated text preview
        """
        text = collect_user_text(messages)

        if text.strip():
            reasoning_score, execution_score = self._scores(text)
        else:
            reasoning_score = execution_score = 0

        return ClassificationDetails(
            type=_decide(reasoning_score, execution_score),
            reasoning_score=reasoning_score,
            execution_score=execution_score,
            text_length=len(text),
            text_preview=_preview(text),
        )
