"""
Data models for the ChatGPT CLI.
All Pydantic models exchanged with the chat endpoint or written to the log live here.
"""

from datetime import datetime
from typing import List, Optional, Union
from pydantic import BaseModel, Field, ValidationInfo, field_validator


class ResponseModel(BaseModel):
    """Base for payloads decoded from the endpoint: a JSON null reads as the field default."""

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value, info: ValidationInfo):
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


class Message(ResponseModel):
    """A single chat message."""

    role: str = Field(default="", description="Author of the message: 'user', 'assistant' or 'system'")
    content: Optional[str] = Field(default="", description="Text of the message")


class ChatRequest(BaseModel):
    """Payload POSTed to the chat-completion endpoint."""

    model: str = Field(..., description="Model identifier")
    messages: List[Message] = Field(..., description="Conversation sent to the model")
    max_tokens: int = Field(..., description="Upper bound on tokens in the completion")
    temperature: float = Field(..., description="Sampling temperature, 0.0-2.0")


class Choice(ResponseModel):
    """One completion candidate."""

    index: int = 0
    message: Message = Field(default_factory=Message)
    finish_reason: Optional[str] = None


class Usage(ResponseModel):
    """Token accounting reported by the endpoint."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class APIError(ResponseModel):
    """Error object the endpoint may embed in an otherwise successful response."""

    message: str = ""
    type: str = ""
    code: Optional[Union[str, int]] = None


class ChatResponse(ResponseModel):
    """Response returned by the chat-completion endpoint."""

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: List[Choice] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)
    error: Optional[APIError] = Field(
        default=None,
        description="Present when the endpoint reports a failure"
    )


class LogEntry(BaseModel):
    """One line of the interaction log."""

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now().astimezone(),
        description="When the command ran"
    )
    command: str = Field(default="", description="Name of the command that produced this entry")
    prompt: Optional[str] = Field(default=None, description="Prompt text sent to the model")
    response: Optional[str] = Field(default=None, description="Text shown to the user")
    error: Optional[str] = Field(default=None, description="Error text if the command failed")
