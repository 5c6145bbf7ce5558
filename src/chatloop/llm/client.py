"""Built-in OpenAI-compatible async httpx client.

Provides an async HTTP client for OpenAI-compatible chat completion APIs,
including the ``"stream": true`` variant decoded by
:mod:`chatloop.llm.streaming`, image-URL vision requests, and audio
transcription/translation uploads. Reads configuration from constructor
arguments or ``CHATLOOP_*`` environment variables.
"""

from __future__ import annotations

import logging
import os
from typing import IO, TYPE_CHECKING, Any, Union
from urllib.parse import urlsplit

import httpx

from chatloop.llm.errors import (
    LLMAPIError,
    LLMAuthError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTransportError,
)
from chatloop.llm.streaming import decode_event_stream
from chatloop.models.config import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    ENV_API_KEY,
    ENV_BASE_URL,
    ENV_MODEL,
    VISION_MODEL_90B,
    VISION_MODELS,
)
from chatloop.protocols import Message

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from chatloop.models.config import ClientConfig

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_ENDPOINT = "/chat/completions"
MODELS_ENDPOINT = "/models"
TRANSCRIPTIONS_ENDPOINT = "/audio/transcriptions"
TRANSLATIONS_ENDPOINT = "/audio/translations"

DEFAULT_TEMPERATURE = 0.7

_AUTH_ERROR_STATUS_CODES = {401, 403}
_IMAGE_URL_SCHEMES = {"http", "https", "data"}
_PLAIN_TEXT_FORMATS = {"text", "srt", "vtt"}

AudioFile = Union[bytes, IO[bytes]]


def simple_messages(prompt: str, system_message: str | None = None) -> list[dict[str, Any]]:
    """Build a one-shot message list: optional system message, then the prompt."""
    messages: list[Message] = []
    if system_message and system_message.strip():
        messages.append(Message.system(system_message))
    messages.append(Message.user(prompt))
    return [m.to_openai() for m in messages]


def vision_messages(prompt: str, image_url: str) -> list[dict[str, Any]]:
    """Build a single user message carrying a text part and an image part."""
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": image_url}},
            ],
        }
    ]


def _validate_vision_request(model: str, image_url: str) -> None:
    if model not in VISION_MODELS:
        raise ValueError(
            f"Invalid vision model {model!r}. Must be one of: "
            + ", ".join(sorted(VISION_MODELS))
        )
    if not image_url or not image_url.strip():
        raise ValueError("Image URL cannot be empty")
    try:
        parts = urlsplit(image_url)
    except ValueError as exc:
        raise ValueError(f"Invalid image URL format: {image_url}") from exc
    if parts.scheme not in _IMAGE_URL_SCHEMES or (
        parts.scheme != "data" and not parts.netloc
    ):
        raise ValueError(f"Invalid image URL format: {image_url}")


def _error_fields(body: object) -> tuple[str | None, str | None, str | None] | None:
    """Pull (message, type, code) out of an ``{"error": ...}`` body.

    Returns None when the body has no ``error`` member. Any other value,
    including an empty object, counts as an error; its fields may be None.
    """
    if not isinstance(body, dict) or body.get("error") is None:
        return None
    error = body["error"]
    if isinstance(error, dict):
        message = error.get("message")
        code = error.get("code")
        return (
            str(message) if message is not None else None,
            error.get("type"),
            str(code) if code is not None else None,
        )
    return str(error), None, None


class AsyncOpenAIClient:
    """Async httpx client for OpenAI-compatible chat completions.

    Implements the CompletionInvoker protocol. Errors are raised as typed
    ``LLMClientError`` subclasses and are never retried.

    Usage::

        async with AsyncOpenAIClient(api_key="gsk-...") as client:
            response = await client.chat([{"role": "user", "content": "Hello"}])
            text = AsyncOpenAIClient.extract_content(response)
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        default_model: str | None = None,
        timeout: float = 120.0,
        connect_timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: API key. Falls back to CHATLOOP_API_KEY env var.
            base_url: API base URL. Falls back to CHATLOOP_BASE_URL env var,
                then to the Groq OpenAI-compatible endpoint.
            default_model: Model used when a call does not name one. Falls
                back to CHATLOOP_MODEL env var.
            timeout: Request timeout in seconds.
            connect_timeout: Connection timeout in seconds.
            http_client: Pre-built httpx.AsyncClient (e.g. with a mock
                transport). The caller keeps ownership of it.

        Raises:
            LLMConfigError: If no API key is provided or found in environment.
        """
        self._api_key = api_key or os.environ.get(ENV_API_KEY, "")
        if not self._api_key:
            raise LLMConfigError(
                f"No API key provided. Pass api_key= or set {ENV_API_KEY} "
                "environment variable."
            )
        self._base_url = (
            base_url or os.environ.get(ENV_BASE_URL) or DEFAULT_BASE_URL
        ).rstrip("/")
        self._default_model = (
            default_model or os.environ.get(ENV_MODEL) or DEFAULT_MODEL
        )
        self._auth_headers = {"Authorization": f"Bearer {self._api_key}"}
        self._headers = {"Content-Type": "application/json", **self._auth_headers}
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=connect_timeout),
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> AsyncOpenAIClient:
        """Create a client from a :class:`ClientConfig`."""
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            default_model=config.default_model,
            timeout=config.timeout,
            connect_timeout=config.connect_timeout,
            http_client=http_client,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def default_model(self) -> str:
        return self._default_model

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def chat(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> dict:
        """Send a chat completion request.

        Args:
            messages: List of message dicts in OpenAI format.
            model: Model to use. Falls back to default_model.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens to generate.
            **kwargs: Additional payload parameters (``tools``,
                ``tool_choice``, ...) forwarded to the API.

        Returns:
            Full response dict with 'choices', 'usage', 'model', etc.

        Raises:
            LLMTransportError: On connection-level failures.
            LLMAuthError: On 401/403.
            LLMRateLimitError: On 429.
            LLMAPIError: On other non-2xx statuses or an error body.
            LLMResponseError: If the body is not a JSON object.
        """
        payload = self._build_payload(messages, model, temperature, max_tokens, kwargs)
        logger.debug(
            "Chat request: model=%s, messages=%d, tools=%d",
            payload["model"],
            len(messages),
            len(payload.get("tools") or ()),
        )
        response = await self._send("POST", CHAT_COMPLETIONS_ENDPOINT, json=payload)
        data = self._parse_json(response)
        fields = _error_fields(data)
        if fields is not None:
            message, error_type, error_code = fields
            raise LLMAPIError(
                400,
                f"API error: {message or 'Unknown error'}",
                error_type=error_type,
                error_code=error_code,
            )
        return data

    async def chat_text(
        self,
        prompt: str,
        *,
        model: str | None = None,
        system_message: str | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> str:
        """Send a single prompt and return only the reply text.

        Returns:
            The assistant content, or an empty string if it had none.
        """
        response = await self.chat(
            simple_messages(prompt, system_message),
            model=model,
            temperature=temperature,
        )
        return self.extract_content(response)

    async def vision_chat(
        self,
        prompt: str,
        image_url: str,
        *,
        model: str = VISION_MODEL_90B,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> dict:
        """Ask a vision model about an image reachable by URL.

        Args:
            prompt: Question or instruction about the image.
            image_url: ``http(s)://`` URL of the image, or a ``data:`` URL
                the caller has already encoded.
            model: One of ``VISION_MODELS``.

        Returns:
            Full response dict, as from :meth:`chat`.

        Raises:
            ValueError: If the model is not a vision model or the URL is
                empty or malformed. Raised before any request is sent.
        """
        _validate_vision_request(model, image_url)
        return await self.chat(
            vision_messages(prompt, image_url),
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )

    async def stream_chat(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> AsyncIterator[dict]:
        """Stream a chat completion as decoded JSON chunks.

        The request is sent with ``"stream": true``. Chunks are yielded as
        their lines arrive; iteration stops after the ``[DONE]`` sentinel.

        Raises:
            LLMTransportError: On connection failures or a non-2xx status.
            StreamTruncatedError: If the body ends without ``[DONE]``.
            StreamDecodeError: If a data line is not valid JSON.
        """
        payload = self._build_payload(messages, model, temperature, max_tokens, kwargs)
        payload["stream"] = True
        url = self._base_url + CHAT_COMPLETIONS_ENDPOINT
        logger.debug("Stream request: model=%s, messages=%d", payload["model"], len(messages))
        try:
            async with self._client.stream(
                "POST", url, json=payload, headers=self._headers
            ) as response:
                if not response.is_success:
                    body = (await response.aread()).decode("utf-8", errors="replace")
                    raise LLMTransportError(
                        f"Stream request failed with status "
                        f"{response.status_code}: {body}",
                        status_code=response.status_code,
                    )
                async for event in decode_event_stream(response.aiter_lines()):
                    yield event
        except httpx.HTTPError as exc:
            raise LLMTransportError(f"Stream request failed: {exc}") from exc

    async def stream_text(
        self,
        prompt: str,
        *,
        model: str | None = None,
        system_message: str | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> AsyncIterator[str]:
        """Stream a single prompt, yielding non-empty content fragments."""
        async for chunk in self.stream_chat(
            simple_messages(prompt, system_message),
            model=model,
            temperature=temperature,
        ):
            text = self.extract_chunk_content(chunk)
            if text:
                yield text

    async def list_models(self) -> dict:
        """List the models available to this API key.

        Returns:
            Response dict with a ``data`` list of model objects.
        """
        response = await self._send("GET", MODELS_ENDPOINT)
        return self._parse_json(response)

    async def transcribe(
        self,
        file: AudioFile,
        filename: str,
        model: str,
        *,
        prompt: str | None = None,
        response_format: str = "json",
        language: str | None = None,
        temperature: float | None = None,
    ) -> dict:
        """Transcribe speech in an audio file.

        Args:
            file: Audio bytes or a binary file object opened by the caller.
            filename: Name sent with the upload; the server uses its
                extension to detect the format.
            model: Speech model, e.g. ``whisper-large-v3``.
            prompt: Optional text to guide style or vocabulary.
            response_format: ``json``, ``verbose_json``, ``text``, ``srt``
                or ``vtt``.
            language: Optional ISO-639-1 language of the audio.
            temperature: Optional sampling temperature.

        Returns:
            The response dict (``{"text": ...}`` for plain-text formats).
        """
        fields = self._audio_fields(model, prompt, response_format, temperature)
        if language and language.strip():
            fields["language"] = language
        return await self._upload_audio(
            TRANSCRIPTIONS_ENDPOINT, file, filename, fields, response_format
        )

    async def translate(
        self,
        file: AudioFile,
        filename: str,
        model: str,
        *,
        prompt: str | None = None,
        response_format: str = "json",
        temperature: float | None = None,
    ) -> dict:
        """Translate speech in an audio file into English text.

        Arguments are as for :meth:`transcribe`, without ``language``.
        """
        fields = self._audio_fields(model, prompt, response_format, temperature)
        return await self._upload_audio(
            TRANSLATIONS_ENDPOINT, file, filename, fields, response_format
        )

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> AsyncOpenAIClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------

    def _build_payload(
        self,
        messages: list[dict[str, Any]],
        model: str | None,
        temperature: float | None,
        max_tokens: int | None,
        extra: dict[str, Any],
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": model or self._default_model,
            "messages": messages,
        }
        if temperature is not None:
            payload["temperature"] = temperature
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        payload.update(extra)
        return payload

    @staticmethod
    def _audio_fields(
        model: str,
        prompt: str | None,
        response_format: str,
        temperature: float | None,
    ) -> dict[str, str]:
        fields = {"model": model, "response_format": response_format}
        if prompt and prompt.strip():
            fields["prompt"] = prompt
        if temperature is not None:
            fields["temperature"] = str(temperature)
        return fields

    async def _upload_audio(
        self,
        endpoint: str,
        file: AudioFile,
        filename: str,
        fields: dict[str, str],
        response_format: str,
    ) -> dict:
        logger.debug("Audio request: %s model=%s file=%s", endpoint, fields["model"], filename)
        # httpx sets the multipart Content-Type (with boundary) itself.
        response = await self._send(
            "POST",
            endpoint,
            data=fields,
            files={"file": (filename, file)},
            headers=self._auth_headers,
        )
        if response_format in _PLAIN_TEXT_FORMATS:
            return {"text": response.text}
        return self._parse_json(response)

    async def _send(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Response:
        """Execute one request and map failures onto the error hierarchy."""
        headers = kwargs.pop("headers", self._headers)
        try:
            response = await self._client.request(
                method, self._base_url + endpoint, headers=headers, **kwargs
            )
        except httpx.HTTPError as exc:
            raise LLMTransportError(f"Request failed: {exc}") from exc
        self._raise_for_status(response)
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return

        status = response.status_code
        try:
            body: object = response.json()
        except ValueError:
            body = None
        message, error_type, error_code = _error_fields(body) or (None, None, None)
        detail = message or response.text

        if status in _AUTH_ERROR_STATUS_CODES:
            raise LLMAuthError(
                status,
                f"Authentication failed: HTTP {status} - {detail}",
                error_type=error_type,
                error_code=error_code,
            )

        if status == 429:
            retry_after_raw = response.headers.get("Retry-After")
            retry_after: float | None = None
            if retry_after_raw is not None:
                try:
                    retry_after = float(retry_after_raw)
                except (ValueError, TypeError):
                    pass
            raise LLMRateLimitError(
                f"Rate limited: HTTP 429 - {detail}",
                retry_after=retry_after,
                error_type=error_type,
                error_code=error_code,
            )

        raise LLMAPIError(
            status,
            f"API request failed with status {status}: {detail}",
            error_type=error_type,
            error_code=error_code,
        )

    @staticmethod
    def _parse_json(response: httpx.Response) -> dict:
        try:
            data = response.json()
        except ValueError as exc:
            raise LLMResponseError(
                f"Failed to parse JSON response: {response.text[:200]}"
            ) from exc
        if not isinstance(data, dict):
            raise LLMResponseError(
                f"Unexpected response format: expected an object. Response: {data}"
            )
        return data

    # ------------------------------------------------------------------
    # Response helpers
    # ------------------------------------------------------------------

    @staticmethod
    def extract_content(response: dict) -> str:
        """Extract the assistant's message content from a response dict.

        Raises:
            LLMResponseError: If the response format is unexpected.
        """
        try:
            return response["choices"][0]["message"].get("content") or ""
        except (KeyError, IndexError, TypeError, AttributeError) as exc:
            raise LLMResponseError(
                f"Cannot extract content from response: {exc}. "
                f"Response: {response}"
            ) from exc

    @staticmethod
    def extract_chunk_content(chunk: dict) -> str | None:
        """Extract the ``delta.content`` fragment from a stream chunk."""
        try:
            return chunk["choices"][0]["delta"].get("content")
        except (KeyError, IndexError, TypeError, AttributeError):
            return None

    @staticmethod
    def extract_usage(response: dict) -> dict | None:
        """Extract usage information from a response dict, if present."""
        return response.get("usage")
