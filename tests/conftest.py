"""
Pytest configuration and fixtures for all tests.

This file is automatically loaded by pytest and provides common fixtures
and configuration for all test modules.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from thinking_control.config import PipelineConfig
from thinking_control.utils.unified_logger import get_logger


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep the global logger off the console during tests."""
    logger = get_logger()
    previous = logger.console_output
    logger.console_output = False
    yield logger
    logger.console_output = previous


@pytest.fixture
def default_config():
    """Pipeline config with defaults, independent of the environment."""
    return PipelineConfig(
        force_english=True,
        thinking_budget=None,
        default_budget=8192,
        loop_threshold=3,
        thinking_field="thinking",
    )


@pytest.fixture
def system_and_user_messages():
    """A system prompt followed by one user turn."""
    return [
        {"role": "system", "content": "You are a coding assistant."},
        {"role": "user", "content": "Fix the bug in login.js"},
    ]


@pytest.fixture
def block_messages():
    """User message with text and image content blocks."""
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": "Consider the pros and cons of GraphQL vs REST"},
                {"type": "image", "source": {"type": "base64", "media_type": "image/png", "data": "iVBOR"}},
            ],
        }
    ]
