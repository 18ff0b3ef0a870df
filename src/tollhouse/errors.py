"""tollhouse exception hierarchy.

Only misconfiguration raises. Cookies arriving from clients are untrusted
input: parsing and verification never raise for them.
"""


class TollhouseError(Exception):
    """Base for all tollhouse-specific errors."""


class ConfigurationError(TollhouseError):
    """Raised when cookie signing is misconfigured.

    A missing secret or an unknown digest algorithm is a deployment
    mistake, so it surfaces at the call site instead of at request time.
    """
