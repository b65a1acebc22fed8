"""Request caller context, passed explicitly into every service call."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Caller:
    """Who is calling and from where.

    ``principal`` is the authenticated subject, or None for anonymous
    callers of the public endpoints.
    """

    address: str
    principal: str | None = None
