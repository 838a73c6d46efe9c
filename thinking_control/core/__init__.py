"""
Thinking Control Core

Components:
    - lexicon: Word-boundary keyword scoring
    - task_classifier: Reasoning / execution / mixed classification
    - budget: Budget parsing and the thinking on/off policy
    - locale_enforcer: English-only directive injection
    - loop_detection: Planning loop detection over stream events
    - pipeline: Orchestrator exposing the request and stream entry points
"""

# Classification
from .task_classifier import (
    TaskType,
    TaskClassifier,
    ClassificationDetails
)

# Budget
from .budget import (
    BudgetBand,
    BudgetCalculator,
    parse_budget,
    should_enable_thinking
)

# Locale
from .locale_enforcer import LocaleEnforcer

# Stream
from .events import StreamEvent, EventType, BlockType
from .loop_detection import LoopDetector, fold_stream

# Orchestration
from .pipeline import ThinkingPipeline, StreamObserver, RequestTransform
from .exceptions import ConfigurationError

__all__ = [
    # Classification
    "TaskType",
    "TaskClassifier",
    "ClassificationDetails",

    # Budget
    "BudgetBand",
    "BudgetCalculator",
    "parse_budget",
    "should_enable_thinking",

    # Locale
    "LocaleEnforcer",

    # Stream
    "StreamEvent",
    "EventType",
    "BlockType",
    "LoopDetector",
    "fold_stream",

    # Orchestration
    "ThinkingPipeline",
    "StreamObserver",
    "RequestTransform",
    "ConfigurationError",
]
