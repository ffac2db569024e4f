# odyssey/core/errors.py

"""
Failures that can end an itinerary request.

Every one of them leads to the same error panel; the class only decides the
message (and, for the HTTP endpoint, the status code).
"""


class OdysseyError(RuntimeError):
    """Base class for itinerary generation failures."""


class MissingCredentialError(OdysseyError):
    """The Gemini API key is not configured; no remote call was attempted."""


class GenerationError(OdysseyError):
    """The remote call itself failed (network, quota, non-success response)."""


class EmptyResponseError(OdysseyError):
    """The call succeeded but returned no text."""


class MalformedResponseError(OdysseyError):
    """The returned text is not a JSON object."""
