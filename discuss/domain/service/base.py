"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Services own a repository and hold the comment rules: what may be
    written, who may delete, and how flat rows become a thread.
    """

    pass
