"""
Thinking budget policy.

The target API only supports binary thinking (on/off), not graduated
reasoning effort. This module maps a configured budget and a task type to
that switch.

Budget bands (CCS_GLMT_THINKING_BUDGET):
    - 0 or "unlimited": always enable thinking
    - 1-2048: disable thinking (fast execution)
    - 2049-8192: task-aware (reasoning and mixed think, execution does not)
    - >8192: always enable thinking
"""

import math
import re
import sys
from enum import Enum
from typing import Any, Optional, Union

from thinking_control.config import (
    DEFAULT_THINKING_BUDGET,
    LOW_BUDGET_THRESHOLD,
    MEDIUM_BUDGET_THRESHOLD
)
from .exceptions import ConfigurationError
from .task_classifier import TaskType

UNLIMITED_BUDGET = 0

# Leading integer, the way budget strings have always been read ("12abc" -> 12)
_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


class BudgetBand(str, Enum):
    """Budget ranges with their human-readable descriptions"""
    UNLIMITED = "unlimited"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def description(self) -> str:
        return _BAND_DESCRIPTIONS[self]


_BAND_DESCRIPTIONS = {
    BudgetBand.UNLIMITED: "unlimited (always think)",
    BudgetBand.LOW: "low (fast execution, no thinking)",
    BudgetBand.MEDIUM: "medium (task-aware thinking)",
    BudgetBand.HIGH: "high (always think)",
}


class BudgetCalculator:
    """
    Decides when to enable thinking based on task type and budget.

    Example:
        >>> calculator = BudgetCalculator()
        >>> calculator.should_enable_thinking(TaskType.EXECUTION, "4096")
        False
        >>> calculator.should_enable_thinking(TaskType.EXECUTION, "unlimited")
        True
    """

    def __init__(self,
                 default_budget: int = DEFAULT_THINKING_BUDGET,
                 low_threshold: int = LOW_BUDGET_THRESHOLD,
                 medium_threshold: int = MEDIUM_BUDGET_THRESHOLD):
        """
        Initialize the calculator.

        Args:
            default_budget: Budget used when the raw value is missing or invalid
            low_threshold: Budgets at or below this disable thinking
            medium_threshold: Budgets above this always enable thinking

        Raises:
            ConfigurationError: If a value is negative or the thresholds are inverted
        """
        if default_budget < 0 or low_threshold < 0 or medium_threshold < 0:
            raise ConfigurationError("Budget values must be non-negative")
        if low_threshold > medium_threshold:
            raise ConfigurationError(
                f"low_threshold ({low_threshold}) must not exceed medium_threshold ({medium_threshold})"
            )

        self.default_budget = default_budget
        self.low_threshold = low_threshold
        self.medium_threshold = medium_threshold

    def parse_budget(self, raw_budget: Any) -> int:
        """
        Parse a budget from configuration. Never raises.

        Args:
            raw_budget: String, number, or None

        Returns:
            Parsed budget (0 = unlimited); the default for missing or invalid input
        """
        # None and "" mean "not configured"; 0 is a valid (unlimited) budget
        if raw_budget is None or raw_budget == '':
            return self.default_budget

        # bool is an int subclass but is never a budget
        if isinstance(raw_budget, bool):
            return self.default_budget

        if isinstance(raw_budget, str):
            if raw_budget.strip().lower() == 'unlimited':
                return UNLIMITED_BUDGET
            match = _LEADING_INT.match(raw_budget)
            if not match:
                return self.default_budget
            digits = match.group(1)
            if digits.startswith('-'):
                return UNLIMITED_BUDGET
            try:
                return int(digits)
            except ValueError:
                # Beyond the int string-conversion digit limit: a high budget
                return sys.maxsize

        if isinstance(raw_budget, (int, float)):
            if isinstance(raw_budget, float) and not math.isfinite(raw_budget):
                return self.default_budget
            if raw_budget < 0:
                return UNLIMITED_BUDGET
            return int(raw_budget)

        return self.default_budget

    def get_budget_band(self, budget: int) -> BudgetBand:
        """Band of an already-parsed budget."""
        if budget == UNLIMITED_BUDGET:
            return BudgetBand.UNLIMITED
        if budget <= self.low_threshold:
            return BudgetBand.LOW
        if budget <= self.medium_threshold:
            return BudgetBand.MEDIUM
        return BudgetBand.HIGH

    def get_budget_description(self, budget: int) -> str:
        """Human-readable description of an already-parsed budget."""
        return self.get_budget_band(budget).description

    def should_enable_thinking(self,
                               task_type: Optional[Union[TaskType, str]],
                               raw_budget: Any) -> bool:
        """
        Determine if thinking should be enabled.

        Args:
            task_type: TaskType (or its string value); unknown values count as mixed
            raw_budget: Budget as configured (string, number, or None)

        Returns:
            True if thinking should be enabled
        """
        budget = self.parse_budget(raw_budget)

        # Unlimited: always think
        if budget == UNLIMITED_BUDGET:
            return True

        # Low budget: fast execution mode
        if budget <= self.low_threshold:
            return False

        # High budget: always think
        if budget > self.medium_threshold:
            return True

        # Medium budget: task-aware decision
        if task_type == TaskType.REASONING:
            return True
        if task_type == TaskType.EXECUTION:
            return False
        # Mixed, ambiguous or unrecognized: safe default
        return True


_default_calculator = BudgetCalculator()


def parse_budget(raw_budget: Any) -> int:
    """Parse a budget with the default calculator."""
    return _default_calculator.parse_budget(raw_budget)


def should_enable_thinking(task_type: Optional[Union[TaskType, str]], raw_budget: Any) -> bool:
    """Thinking decision with the default calculator."""
    return _default_calculator.should_enable_thinking(task_type, raw_budget)


def get_budget_description(budget: int) -> str:
    """Budget description with the default calculator."""
    return _default_calculator.get_budget_description(budget)
