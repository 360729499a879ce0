"""Router configuration.

RouterConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router and transport configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(debug=True, not_found_body="nothing here")
    """

    # Registration
    strict_patterns: bool = True  # Reject malformed patterns at register() time

    # Transport adapter
    offload_dispatch: bool = True  # Run sync dispatch in a worker thread
    not_found_status: int = 404
    not_found_body: str = "Not Found"
    debug: bool = False  # Include exception text in 500 bodies

    # Logging
    log_level: str = "warning"
