"""
Exceptions raised by the CLI.
Every error carries the message that is shown to the user.
"""


class CLIError(Exception):
    """Base class for errors that end a command with a non-zero exit status."""


class UsageError(CLIError):
    """Missing or malformed command arguments."""


class ConfigValidationError(CLIError):
    """A configuration value failed validation."""


class ConfigError(CLIError):
    """The config directory or config file could not be created, read or written."""


class ChatClientError(CLIError):
    """The chat-completion request failed."""


class RequestTimeoutError(ChatClientError):
    """The request did not complete within the configured timeout."""


class UnexpectedStatusError(ChatClientError):
    """The endpoint answered with a status other than 200 OK."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"unexpected status code: {status_code}, response: {body}")
        self.status_code = status_code
        self.body = body


class ResponseParseError(ChatClientError):
    """The response body is not a chat-completion JSON document."""


class APIResponseError(ChatClientError):
    """The endpoint returned an error object inside a 200 response."""

    def __init__(self, message: str, error_type: str):
        super().__init__(f"API error: {message} (type: {error_type})")
        self.api_message = message
        self.error_type = error_type
