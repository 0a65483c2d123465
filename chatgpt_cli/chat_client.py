"""
HTTP client for OpenAI-compatible chat-completion endpoints.
"""

from typing import Optional
import logging
import time

import httpx
from pydantic import ValidationError

from chatgpt_cli.config import Config
from chatgpt_cli.data_models import ChatRequest, ChatResponse, Message
from chatgpt_cli.errors import (
    APIResponseError,
    ChatClientError,
    RequestTimeoutError,
    ResponseParseError,
    UnexpectedStatusError,
)
from chatgpt_cli.helpers.parsers import format_duration

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "No response received from ChatGPT"


def build_chat_request(config: Config, prompt: str) -> ChatRequest:
    """Build a request carrying the prompt as the single user message."""
    return ChatRequest(
        model=config.model,
        messages=[Message(role="user", content=prompt)],
        max_tokens=config.max_tokens,
        temperature=config.temperature,
    )


def send_chat_request(
    config: Config,
    prompt: str,
    transport: Optional[httpx.BaseTransport] = None
) -> ChatResponse:
    """
    Send one prompt to the configured endpoint.

    Args:
        config: Resolved configuration (URL, key, model, limits, timeout)
        prompt: Text sent as the user message
        transport: Optional httpx transport, used to stub the endpoint in tests

    Returns:
        The parsed ChatResponse

    Raises:
        RequestTimeoutError: If the exchange exceeds config.timeout
        UnexpectedStatusError: If the status is not 200
        ResponseParseError: If the body is not a chat-completion document
        APIResponseError: If the body carries an error object
        ChatClientError: For any other transport failure
    """
    try:
        payload = build_chat_request(config, prompt).model_dump_json()
    except ValueError as e:
        raise ChatClientError(f"failed to marshal request: {e}") from e

    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {config.api_key}",
    }
    seconds = config.timeout.total_seconds()
    timeout = seconds if seconds > 0 else None
    # config.timeout bounds the whole exchange, not each connect/read separately
    deadline = time.monotonic() + seconds if timeout else None

    def check_deadline() -> None:
        if deadline is not None and time.monotonic() > deadline:
            raise RequestTimeoutError(f"request timed out after {format_duration(config.timeout)}")

    logger.debug("POST %s model=%s timeout=%s", config.api_url, config.model, format_duration(config.timeout))

    body = bytearray()
    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            with client.stream(
                "POST", config.api_url, content=payload.encode("utf-8"), headers=headers
            ) as resp:
                check_deadline()
                for chunk in resp.iter_bytes():
                    body.extend(chunk)
                    check_deadline()
    except httpx.TimeoutException as e:
        raise RequestTimeoutError(
            f"request timed out after {format_duration(config.timeout)}: {e}"
        ) from e
    except httpx.HTTPError as e:
        raise ChatClientError(f"failed to send request: {e}") from e

    logger.debug("Response status %d (%d bytes)", resp.status_code, len(body))

    if resp.status_code != httpx.codes.OK:
        raise UnexpectedStatusError(resp.status_code, body.decode("utf-8", errors="replace"))

    try:
        response = ChatResponse.model_validate_json(bytes(body))
    except ValidationError as e:
        raise ResponseParseError(f"failed to parse response: {e}") from e

    if response.error is not None:
        raise APIResponseError(response.error.message, response.error.type)

    return response


def format_response(response: ChatResponse) -> str:
    """Return the first choice's text, stripped, or a placeholder when there are no choices."""
    if not response.choices:
        return NO_RESPONSE_TEXT
    return (response.choices[0].message.content or "").strip()
