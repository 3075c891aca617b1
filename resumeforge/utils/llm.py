"""
Text-generation providers and response parsing.

Every provider takes a system prompt and a user prompt and returns one
LLMResponse. Transient provider failures (overload, rate limits, 5xx) are
retried with exponential backoff; anything else propagates to the caller.

Provider SDKs are imported only when that provider is constructed, so only the
SDK of the configured provider has to be installed.
"""

import importlib
import os
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Type, TypeVar

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

MAX_RETRIES = 5
BASE_DELAY = 1.0
DEFAULT_MAX_OUTPUT_TOKENS = 4096

T = TypeVar("T")


def _retry_with_backoff(
    operation: Callable[[], T],
    retryable: Tuple[Type[Exception], ...],
    label: str,
) -> T:
    """
    Run operation, retrying on the given exception types.

    Waits BASE_DELAY, 2*BASE_DELAY, 4*BASE_DELAY, ... between attempts and makes
    at most MAX_RETRIES attempts; the last failure is re-raised.
    """
    delays = [BASE_DELAY * 2**n for n in range(MAX_RETRIES - 1)]
    for attempt, delay in enumerate(delays, start=1):
        try:
            return operation()
        except retryable as e:
            logger.warning(f"{label} ({type(e).__name__}), attempt {attempt}/{MAX_RETRIES}; waiting {delay:.1f}s")
            time.sleep(delay)
    return operation()


def _import_sdk(module_name: str, package: str):
    try:
        return importlib.import_module(module_name)
    except ImportError as e:
        raise ImportError(f"The {package} package is required for this provider: pip install {package}") from e


@dataclass
class LLMResponse:
    """One completed generation with token usage."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Base class for text-generation providers.

    Subclasses set provider_name, api_key_env and default_model, and implement
    _connect() (returns the SDK client and sets retryable_errors) and
    _call_api() (a single request, no retries).

    The model is chosen from, in order: the model argument, the
    <PROVIDER>_MODEL environment variable, default_model.
    """

    provider_name: str = ""
    api_key_env: str = ""
    default_model: str = ""
    retryable_errors: Tuple[Type[Exception], ...] = ()
    retry_label: str = "Provider unavailable"

    model: str

    def __init__(self, model: Optional[str] = None, max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS):
        api_key = os.getenv(self.api_key_env)
        if not api_key:
            raise ValueError(f"{self.api_key_env} environment variable not set")

        self.model = model or os.getenv(f"{self.provider_name.upper()}_MODEL") or self.default_model
        self.max_output_tokens = max_output_tokens
        self.client = self._connect(api_key)

    @property
    def name(self) -> str:
        return f"{self.provider_name}/{self.model}"

    @abstractmethod
    def _connect(self, api_key: str):
        """Create the SDK client."""

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Make a single request."""

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Generate a response, retrying transient provider errors."""
        return _retry_with_backoff(
            lambda: self._call_api(system_prompt, user_prompt),
            self.retryable_errors,
            f"{self.name}: {self.retry_label}",
        )


class GeminiProvider(LLMProvider):
    """Google Gemini through the google-genai SDK."""

    provider_name = "gemini"
    api_key_env = "GEMINI_API_KEY"
    default_model = "gemini-2.0-flash"
    retry_label = "server error"

    def _connect(self, api_key: str):
        genai = _import_sdk("google.genai", "google-genai")
        self._types = _import_sdk("google.genai.types", "google-genai")
        self.retryable_errors = (_import_sdk("google.genai.errors", "google-genai").ServerError,)
        return genai.Client(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.models.generate_content(
            model=self.model,
            contents=user_prompt,
            config=self._types.GenerateContentConfig(
                system_instruction=system_prompt or None,
                max_output_tokens=self.max_output_tokens,
            ),
        )
        usage = response.usage_metadata
        return LLMResponse(
            content=response.text or "",
            model=self.model,
            input_tokens=(usage.prompt_token_count or 0) if usage else 0,
            output_tokens=(usage.candidates_token_count or 0) if usage else 0,
        )


class AnthropicProvider(LLMProvider):
    """Anthropic Claude through the anthropic SDK (optional extra)."""

    provider_name = "anthropic"
    api_key_env = "ANTHROPIC_API_KEY"
    default_model = "claude-sonnet-4-20250514"
    retry_label = "overloaded"

    def _connect(self, api_key: str):
        anthropic = _import_sdk("anthropic", "anthropic")
        self.retryable_errors = (anthropic.OverloadedError, anthropic.RateLimitError)
        return anthropic.Anthropic(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        message = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_output_tokens,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        text = "".join(block.text for block in message.content if getattr(block, "type", "") == "text")
        return LLMResponse(
            content=text,
            model=self.model,
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions through the openai SDK (optional extra)."""

    provider_name = "openai"
    api_key_env = "OPENAI_API_KEY"
    default_model = "gpt-4o"
    retry_label = "rate limited"

    def _connect(self, api_key: str):
        openai = _import_sdk("openai", "openai")
        self.retryable_errors = (openai.RateLimitError, openai.InternalServerError)
        return openai.OpenAI(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        completion = self.client.chat.completions.create(
            model=self.model,
            max_tokens=self.max_output_tokens,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        usage = completion.usage
        return LLMResponse(
            content=completion.choices[0].message.content or "",
            model=self.model,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )


PROVIDERS = {
    "gemini": GeminiProvider,
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
}


def get_provider(
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
) -> LLMProvider:
    """
    Construct a provider by name.

    Args:
        provider_name: Key of PROVIDERS (default: LLM_PROVIDER env variable, then "gemini")
        model: Model override
        max_output_tokens: Response length cap passed to the provider

    Raises:
        ValueError: Unknown provider or missing API key
        ImportError: Provider SDK not installed
    """
    name = (provider_name or os.getenv("LLM_PROVIDER", "gemini")).lower()
    if name not in PROVIDERS:
        raise ValueError(f"Unknown provider: {name!r}. Choose from: {', '.join(PROVIDERS)}")
    return PROVIDERS[name](model=model, max_output_tokens=max_output_tokens)


_FENCE_OPEN = re.compile(r"^```[a-zA-Z]*\s*")
_FENCE_CLOSE = re.compile(r"```\s*$")


def extract_json_object(text: str) -> str:
    """
    Isolate the JSON object in a model response.

    Strips markdown code fences, then keeps the span from the first "{" to the
    last "}". Text without a brace pair is returned stripped but otherwise as-is
    so the caller's JSON parser reports the failure.

    Example:
        >>> extract_json_object('```json\\n{"summary": "hi"}\\n```')
        '{"summary": "hi"}'
    """
    raw = (text or "").strip()

    if raw.startswith("```"):
        raw = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", raw)).strip()

    start, end = raw.find("{"), raw.rfind("}")
    if 0 <= start < end:
        raw = raw[start : end + 1]

    return raw
