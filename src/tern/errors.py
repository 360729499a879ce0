"""Tern exception hierarchy.

Shared across the pattern matcher, route table, router, and transport
adapter so every module raises and catches the same types.

A failed match is not an error, and neither is a request that no route
handled. Both are ordinary dispatch outcomes.
"""


class TernError(Exception):
    """Base for all tern-specific errors."""


class ConfigurationError(TernError):
    """Raised when router setup is invalid.

    Typically raised during the registration phase, before any request
    is dispatched.
    """


class InvalidPatternError(ConfigurationError):
    """Raised at registration time for a malformed route pattern.

    Carries the offending pattern and a short reason so the message
    points straight at the broken registration.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid route pattern {pattern!r}: {reason}")


class RouterFrozenError(TernError):
    """Raised when a route or interceptor is registered after ``freeze()``."""
