"""
Thinking Control Pipeline

Decides per request whether extended reasoning should be enabled on an API
that only exposes a binary thinking switch, forces the output language, and
watches the response stream for unproductive reasoning loops.

Import components directly from their modules, e.g.:

    from thinking_control.core.pipeline import ThinkingPipeline
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
