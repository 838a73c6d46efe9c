"""
Utility modules

Import helpers directly from their module:

    from thinking_control.utils.unified_logger import get_logger
"""

__all__ = []
