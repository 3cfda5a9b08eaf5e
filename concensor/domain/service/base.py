"""Base class for domain services."""


class Service:
    """Marker base for the engine's domain services.

    Services own the multi-entity rules (a vote touches a post and the
    voter's reputation) and run inside the caller's transaction.
    """
