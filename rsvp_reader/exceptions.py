"""Exception types raised by the RSVP reader core."""


class RSVPError(Exception):
    """Base class for all reader errors."""


class ValidationError(RSVPError, ValueError):
    """Input rejected before any work was done (empty text, bad settings keys)."""
