# ovrstat/errors.py


class OverwatchError(Exception):
    """Base class for every failure the stats pipeline reports."""


class PlayerNotFoundError(OverwatchError):
    """Raised when the tag has no account or the career page is a not-found page."""


class InvalidPlatformError(OverwatchError):
    """Raised when the requested platform is unknown or has no view on the profile."""


class UpstreamUnavailableError(OverwatchError):
    """Raised when the account search or the career page fetch fails or times out."""


class MalformedDocumentError(OverwatchError):
    """Raised when the career page lacks the anchors needed to identify the player."""
