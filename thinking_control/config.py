"""
Centralized configuration for the thinking control pipeline
"""
import os
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
from dotenv import load_dotenv

# Setup debug logger for configuration
_config_logger = logging.getLogger('config')

_TRUE_VALUES = ('true', '1', 'yes', 'on')
_FALSE_VALUES = ('false', '0', 'no', 'off')


def _is_debug(value: Optional[str]) -> bool:
    return (value or '').strip().lower() in _TRUE_VALUES


# Check for DEBUG_MODE early (before .env is loaded, check environment)
_debug_mode = _is_debug(os.getenv('DEBUG_MODE')) or _is_debug(os.getenv('CCS_DEBUG'))
if _debug_mode:
    logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug("DEBUG_MODE enabled - verbose logging active")

# Get config directory (current working directory)
_env_file = Path.cwd() / '.env'

# Load .env file if it exists; real environment variables take precedence
_dotenv_result = load_dotenv(_env_file)
if _debug_mode:
    _config_logger.debug(f"Looking for .env at: {_env_file.absolute()}")
    _config_logger.debug(f"load_dotenv() returned: {_dotenv_result}")


def parse_bool(value: Any, default: bool) -> bool:
    """
    Parse an external boolean flag.

    Accepts real booleans and the strings true/1/yes/on and false/0/no/off
    (case-insensitive). Anything else returns ``default``.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    _config_logger.warning(f"Unrecognized boolean value {value!r}, using default {default}")
    return default


def parse_int(value: Any, default: int, name: str = "value") -> int:
    """Parse an external integer setting, falling back to ``default`` on bad input."""
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        _config_logger.warning(f"Invalid integer for {name}: {value!r}, using default {default}")
        return default


# Budget band thresholds (fixed by the thinking policy)
LOW_BUDGET_THRESHOLD = 2048       # <= this: thinking disabled
MEDIUM_BUDGET_THRESHOLD = 8192    # > this: thinking always enabled

# Load from environment variables with defaults
DEFAULT_THINKING_BUDGET = parse_int(os.getenv('CCS_GLMT_DEFAULT_BUDGET'), MEDIUM_BUDGET_THRESHOLD,
                                    'CCS_GLMT_DEFAULT_BUDGET')
if DEFAULT_THINKING_BUDGET < 0:
    _config_logger.warning(f"CCS_GLMT_DEFAULT_BUDGET must be >= 0, got {DEFAULT_THINKING_BUDGET}; using {MEDIUM_BUDGET_THRESHOLD}")
    DEFAULT_THINKING_BUDGET = MEDIUM_BUDGET_THRESHOLD
# Raw value: may be "unlimited", a number, or unset. Parsed by BudgetCalculator.
THINKING_BUDGET = os.getenv('CCS_GLMT_THINKING_BUDGET')
FORCE_ENGLISH = parse_bool(os.getenv('CCS_GLMT_FORCE_ENGLISH'), True)
LOOP_DETECTION_THRESHOLD = parse_int(os.getenv('CCS_GLMT_LOOP_THRESHOLD'), 3, 'CCS_GLMT_LOOP_THRESHOLD')
if LOOP_DETECTION_THRESHOLD < 1:
    _config_logger.warning(f"CCS_GLMT_LOOP_THRESHOLD must be >= 1, got {LOOP_DETECTION_THRESHOLD}; using 3")
    LOOP_DETECTION_THRESHOLD = 3

# Request payload field that carries the binary reasoning toggle
THINKING_FIELD = os.getenv('CCS_GLMT_THINKING_FIELD', 'thinking')

# Directive prepended to the system prompt (or first user message)
ENGLISH_INSTRUCTION = (
    "CRITICAL: You MUST respond in English only, regardless of the input language or context. "
    "This is a strict requirement."
)

# Content of the system event injected when a planning loop is detected
LOOP_CORRECTION_MESSAGE = "Planning loop detected. Execute action now."

# Debug mode (reload after .env is loaded)
DEBUG_MODE = _is_debug(os.getenv('DEBUG_MODE')) or _is_debug(os.getenv('CCS_DEBUG'))

# Log loaded configuration in debug mode
if DEBUG_MODE or _debug_mode:
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug("=" * 60)
    _config_logger.debug("LOADED CONFIGURATION VALUES:")
    _config_logger.debug("=" * 60)
    _config_logger.debug(f"   CCS_GLMT_FORCE_ENGLISH: {FORCE_ENGLISH}")
    _config_logger.debug(f"   CCS_GLMT_THINKING_BUDGET: {THINKING_BUDGET if THINKING_BUDGET is not None else '(not set)'}")
    _config_logger.debug(f"   CCS_GLMT_DEFAULT_BUDGET: {DEFAULT_THINKING_BUDGET}")
    _config_logger.debug(f"   CCS_GLMT_LOOP_THRESHOLD: {LOOP_DETECTION_THRESHOLD}")
    _config_logger.debug(f"   CCS_GLMT_THINKING_FIELD: {THINKING_FIELD}")
    _config_logger.debug("=" * 60)


@dataclass
class PipelineConfig:
    """Typed settings for one pipeline instance (or one request override)"""

    force_english: bool = FORCE_ENGLISH
    thinking_budget: Optional[Union[str, int, float]] = THINKING_BUDGET
    default_budget: int = DEFAULT_THINKING_BUDGET
    loop_threshold: int = LOOP_DETECTION_THRESHOLD
    thinking_field: str = THINKING_FIELD

    # Keyword overrides: {"reasoning": [...], "execution": [...]}
    custom_keywords: Optional[Dict[str, List[str]]] = field(default=None)

    @classmethod
    def from_env(cls) -> 'PipelineConfig':
        """Create config from the current process environment"""
        return cls(
            force_english=parse_bool(os.getenv('CCS_GLMT_FORCE_ENGLISH'), True),
            thinking_budget=os.getenv('CCS_GLMT_THINKING_BUDGET'),
            default_budget=cls._valid_default_budget(
                parse_int(os.getenv('CCS_GLMT_DEFAULT_BUDGET'), MEDIUM_BUDGET_THRESHOLD, 'CCS_GLMT_DEFAULT_BUDGET')
            ),
            loop_threshold=cls._valid_threshold(
                parse_int(os.getenv('CCS_GLMT_LOOP_THRESHOLD'), 3, 'CCS_GLMT_LOOP_THRESHOLD')
            ),
            thinking_field=os.getenv('CCS_GLMT_THINKING_FIELD', 'thinking'),
        )

    @classmethod
    def from_dict(cls, settings: Dict[str, Any]) -> 'PipelineConfig':
        """
        Create config from plain key-value settings.

        Values may be strings (as they arrive from settings files or the
        environment). Missing keys use the module defaults. ``disable_english``
        is accepted as the inverse of ``force_english``.
        """
        force_english = parse_bool(settings.get('force_english'), FORCE_ENGLISH)
        if 'disable_english' in settings:
            force_english = not parse_bool(settings.get('disable_english'), not force_english)

        return cls(
            force_english=force_english,
            thinking_budget=settings.get('thinking_budget', THINKING_BUDGET),
            default_budget=cls._valid_default_budget(
                parse_int(settings.get('default_budget'), DEFAULT_THINKING_BUDGET, 'default_budget')
            ),
            loop_threshold=cls._valid_threshold(
                parse_int(settings.get('loop_threshold'), LOOP_DETECTION_THRESHOLD, 'loop_threshold')
            ),
            thinking_field=settings.get('thinking_field') or THINKING_FIELD,
            custom_keywords=settings.get('custom_keywords'),
        )

    @staticmethod
    def _valid_default_budget(value: int) -> int:
        if value < 0:
            _config_logger.warning(f"default_budget must be >= 0, got {value}; using {DEFAULT_THINKING_BUDGET}")
            return DEFAULT_THINKING_BUDGET
        return value

    @staticmethod
    def _valid_threshold(value: int) -> int:
        if value < 1:
            _config_logger.warning(f"loop_threshold must be >= 1, got {value}; using {LOOP_DETECTION_THRESHOLD}")
            return LOOP_DETECTION_THRESHOLD
        return value

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            'force_english': self.force_english,
            'thinking_budget': self.thinking_budget,
            'default_budget': self.default_budget,
            'loop_threshold': self.loop_threshold,
            'thinking_field': self.thinking_field,
            'custom_keywords': self.custom_keywords,
        }
