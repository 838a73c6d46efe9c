"""
Pipeline exceptions.

Nothing on the request or stream path raises: every parse degrades to a
documented default. The classes here are only raised when a component is
constructed with an invalid programmatic argument.
"""


class ConfigurationError(ValueError):
    """
    Raised when a component is built with an invalid setting.

    Examples are a loop detection threshold below 1 or negative budget
    thresholds. Values read from the environment never raise; they fall
    back to defaults instead.
    """
    pass
