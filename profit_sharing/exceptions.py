"""
Exceptions raised by the profit sharing engine.
"""


class ConfigurationError(ValueError):
    """A project's profit sharing rules cannot be evaluated.

    Raised for an unrecognized formula type or a malformed rules payload.
    Subclasses ValueError so callers that already treat ValueError as a
    validation failure keep working.
    """
