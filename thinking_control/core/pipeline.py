"""
Thinking control pipeline orchestrator.

Composes the components into the two entry points a transport layer needs:

    Request side:   transform_request / transform_payload
        locale enforcement (on a copy), task classification on the
        original messages, budget resolution

    Response side:  open_stream() -> StreamObserver
        one loop detector per streamed response; corrective events are
        yielded right after the event that triggered them

The pipeline performs no I/O. The transport is responsible for sending the
mutated payload and for forwarding the observed events.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Union

from thinking_control.config import PipelineConfig
from thinking_control.utils.unified_logger import get_logger, LogType
from .budget import BudgetCalculator
from .events import StreamEvent
from .locale_enforcer import LocaleEnforcer
from .loop_detection import LoopDetector
from .messages import Message
from .task_classifier import ClassificationDetails, TaskClassifier, TaskType

ConfigLike = Union[PipelineConfig, Mapping[str, Any]]


@dataclass
class RequestTransform:
    """Result of transforming one outgoing request.

    Attributes:
        messages: Messages to send (directive injected when enabled)
        thinking_enabled: Value for the API's binary reasoning toggle
        task_type: Classification of the original user text
        budget: Parsed budget (0 = unlimited)
        details: Classification scores, for diagnostics only
    """
    messages: List[Message]
    thinking_enabled: bool
    task_type: TaskType
    budget: int
    details: ClassificationDetails


def _resolve_config(config: Optional[ConfigLike], fallback: PipelineConfig) -> PipelineConfig:
    if config is None:
        return fallback
    if isinstance(config, PipelineConfig):
        return config
    # Plain settings override only the keys they name
    return PipelineConfig.from_dict({**fallback.to_dict(), **dict(config)})


class StreamObserver:
    """
    Watches one streamed response for planning loops.

    Owns its own LoopDetector; create a new observer for every stream.
    """

    def __init__(self, detector: LoopDetector):
        self.detector = detector
        self._logger = get_logger()

    def observe_stream_event(self, event: Union[StreamEvent, Mapping[str, Any]]) -> Optional[StreamEvent]:
        """
        Observe one event in arrival order.

        Returns:
            Corrective system event to inject after this event, or None
        """
        correction = self.detector.observe(event)
        if correction is not None:
            self._logger.warning(
                "Planning loop detected, injecting corrective directive",
                LogType.LOOP_DETECTED,
                {
                    'consecutive_blocks': self.detector.consecutive_reasoning_blocks,
                    'threshold': self.detector.threshold,
                    'corrections_emitted': self.detector.corrections_emitted,
                }
            )
        return correction

    def process(self, events: Iterable[Union[StreamEvent, Mapping[str, Any]]]) -> Iterator[StreamEvent]:
        """
        Pass events through, inserting corrective events where needed.

        Events keep their order; a correction directly follows its trigger.
        """
        for event in events:
            event = StreamEvent.coerce(event)
            correction = self.observe_stream_event(event)
            yield event
            if correction is not None:
                yield correction


class ThinkingPipeline:
    """
    Request mutation and stream observation for a binary-thinking API.

    Example:
        >>> pipeline = ThinkingPipeline()
        >>> result = pipeline.transform_request([{"role": "user", "content": "list files in directory"}])
        >>> result.task_type, result.thinking_enabled
        (<TaskType.EXECUTION: 'execution'>, False)
    """

    def __init__(self,
                 config: Optional[ConfigLike] = None,
                 classifier: Optional[TaskClassifier] = None,
                 calculator: Optional[BudgetCalculator] = None,
                 enforcer: Optional[LocaleEnforcer] = None):
        """
        Args:
            config: PipelineConfig or plain settings dict (defaults from environment)
            classifier: Custom TaskClassifier (default built from config keywords)
            calculator: Custom BudgetCalculator (default uses config default budget)
            enforcer: Custom LocaleEnforcer
        """
        self.config = _resolve_config(config, PipelineConfig())
        self.classifier = classifier or TaskClassifier(custom_keywords=self.config.custom_keywords)
        self.calculator = calculator or BudgetCalculator(default_budget=self.config.default_budget)
        self.enforcer = enforcer or LocaleEnforcer(force_english=self.config.force_english)
        self._logger = get_logger()

    def _components_for(self, config: PipelineConfig):
        """Classifier and calculator honoring a per-request override."""
        classifier = self.classifier
        if config.custom_keywords and config.custom_keywords != self.config.custom_keywords:
            classifier = TaskClassifier(custom_keywords=config.custom_keywords)

        calculator = self.calculator
        if config.default_budget != self.calculator.default_budget:
            calculator = BudgetCalculator(
                default_budget=config.default_budget,
                low_threshold=self.calculator.low_threshold,
                medium_threshold=self.calculator.medium_threshold
            )
        return classifier, calculator

    def transform_request(self,
                          messages: Sequence[Message],
                          config: Optional[ConfigLike] = None) -> RequestTransform:
        """
        Prepare one outgoing request.

        Args:
            messages: Caller's messages (never mutated)
            config: Optional per-request override (PipelineConfig or settings dict)

        Returns:
            RequestTransform with the messages to send and the thinking flag
        """
        config = _resolve_config(config, self.config)
        classifier, calculator = self._components_for(config)

        mutated = self.enforcer.inject_instruction(messages, enabled=config.force_english)
        if config.force_english:
            index = self.enforcer.target_index(messages)
            self._logger.debug(
                "English directive injected" if index >= 0 else "No system or user message for English directive",
                LogType.LOCALE_INJECTION,
                {
                    'message_index': index,
                    'role': messages[index].get('role') if index >= 0 else None,
                }
            )

        # Classify the caller's messages so the injected directive never scores
        details = classifier.classify_with_details(messages)
        self._logger.debug("Task classified", LogType.CLASSIFICATION, details.to_dict())
        budget = calculator.parse_budget(config.thinking_budget)
        thinking_enabled = calculator.should_enable_thinking(details.type, budget)

        self._logger.debug(
            "Thinking decision",
            LogType.THINKING_DECISION,
            {
                **details.to_dict(),
                'budget': budget,
                'budget_description': calculator.get_budget_description(budget),
                'thinking_enabled': thinking_enabled,
                'locale_injected': bool(config.force_english),
            }
        )

        return RequestTransform(
            messages=list(mutated),
            thinking_enabled=thinking_enabled,
            task_type=details.type,
            budget=budget,
            details=details,
        )

    def transform_payload(self,
                          payload: Mapping[str, Any],
                          config: Optional[ConfigLike] = None) -> Dict[str, Any]:
        """
        Apply transform_request to a request body.

        Returns a shallow copy of ``payload`` with ``messages`` replaced and
        the reasoning toggle set under the configured field, e.g.
        ``{"thinking": {"type": "enabled"}}``.
        """
        resolved = _resolve_config(config, self.config)
        result = self.transform_request(payload.get('messages') or [], resolved)

        transformed = dict(payload)
        transformed['messages'] = result.messages
        transformed[resolved.thinking_field] = {
            'type': 'enabled' if result.thinking_enabled else 'disabled'
        }
        return transformed

    def open_stream(self, config: Optional[ConfigLike] = None) -> StreamObserver:
        """
        Start observing a new streamed response.

        Args:
            config: Optional per-request override; only loop_threshold applies
        """
        config = _resolve_config(config, self.config)
        return StreamObserver(LoopDetector(threshold=config.loop_threshold))

    def observe_stream(self,
                       events: Iterable[Union[StreamEvent, Mapping[str, Any]]],
                       config: Optional[ConfigLike] = None) -> Iterator[StreamEvent]:
        """Pass one complete stream through a fresh observer."""
        return self.open_stream(config).process(events)
