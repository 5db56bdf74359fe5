"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the discussion rules that span several
    aggregates (posts, replies, votes, forums).
    """

    pass
