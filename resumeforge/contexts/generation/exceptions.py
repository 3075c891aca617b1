"""Custom exceptions for the generation context."""

from typing import Optional


class GenerationError(Exception):
    """Base class for generative-text failures."""


class MalformedResponseError(GenerationError):
    """
    Exception raised when a provider response cannot be parsed into a tailoring result.

    Attributes:
        message: Error description
        raw_text: The response text that failed to parse
    """

    def __init__(self, message: str, raw_text: Optional[str] = None):
        self.message = message
        self.raw_text = raw_text

        parts = [message]
        if raw_text:
            # Truncate snippet if too long
            snippet = raw_text[:200] + "..." if len(raw_text) > 200 else raw_text
            parts.append(f"\nRaw response:\n{snippet}")

        super().__init__("\n".join(parts))


class ProviderRequestError(GenerationError):
    """
    Exception raised when the generative-text provider request fails.

    Attributes:
        provider: Provider name (e.g., "gemini/gemini-2.0-flash")
        original_error: The SDK error
    """

    def __init__(self, provider: str, original_error: Optional[Exception] = None):
        self.provider = provider
        self.original_error = original_error

        message = f"Request to {provider} failed"
        if original_error:
            message += f": {original_error}"
        super().__init__(message)
