"""Request and response models for the AI endpoints."""

from typing import Literal

from pydantic import AliasChoices, BaseModel, Field

from nexus_ai.models.project import ProjectSnapshot


class ConversationTurn(BaseModel):
    """One prior message in a chat."""

    role: Literal["user", "assistant"]
    content: str


class HintsRequest(BaseModel):
    project: ProjectSnapshot | None = None


class RoadmapRequest(BaseModel):
    project: ProjectSnapshot | None = None


class ChatRequest(BaseModel):
    message: str | None = None
    project: ProjectSnapshot | None = None
    conversation_history: list[ConversationTurn] = Field(
        default_factory=list,
        validation_alias=AliasChoices("conversation_history", "conversationHistory"),
    )


class HintsResponse(BaseModel):
    success: bool = True
    hints: str


class ChatResponse(BaseModel):
    success: bool = True
    response: str


class RoadmapResponse(BaseModel):
    success: bool = True
    roadmap: str
