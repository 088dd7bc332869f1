"""HTTP API for the chat assistant.

Why: consumable API without business logic; pure delegation to AnswerQuery.
The caller owns the conversation context and sends it back on every turn.
"""

import logging
from typing import Any

try:
    from fastapi import FastAPI, HTTPException, Request
    from pydantic import BaseModel, ConfigDict, Field
except ImportError as err:
    raise ImportError("FastAPI not installed. Install with: pip install 'yarnbot'") from err

from yarnbot.application.dto.chat_dto import ChatRequest
from yarnbot.application.use_cases.answer_query import AnswerQuery
from yarnbot.domain.models import ConversationContext

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 2000


class QueryRequestModel(BaseModel):
    """Request model for /api/chatbot/query."""

    message: str = Field(max_length=MAX_MESSAGE_LENGTH)
    context: dict[str, Any] | None = None


class QueryResponseModel(BaseModel):
    """Response model for /api/chatbot/query."""

    model_config = ConfigDict(populate_by_name=True)

    response: str
    topic: str
    suggested_questions: list[str] = Field(default_factory=list, alias="suggestedQuestions")
    context: dict[str, Any]


class ResetRequestModel(BaseModel):
    """Request model for /api/chatbot/reset."""

    context: dict[str, Any] | None = None


class ResetResponseModel(BaseModel):
    """Response model for /api/chatbot/reset."""

    context: dict[str, Any]


def create_app(use_case: AnswerQuery | None = None) -> FastAPI:
    """Build the FastAPI app. Without ``use_case`` it is wired from environment settings."""
    if use_case is None:
        from yarnbot.config.composition import build_answer_query_use_case

        use_case = build_answer_query_use_case()

    app = FastAPI(title="KSP Yarns Chat API", version="1.0.0")
    app.state.answer_query = use_case

    def _use_case(request: Request) -> AnswerQuery:
        return request.app.state.answer_query

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post(
        "/api/chatbot/query",
        response_model=QueryResponseModel,
        response_model_by_alias=True,
    )
    def query(req: QueryRequestModel, request: Request) -> QueryResponseModel:
        """Answer one chat turn.

        Example:
            POST /api/chatbot/query
            {"message": "Do you have organic cotton yarn?", "context": {...}}
        """
        if not req.message.strip():
            raise HTTPException(status_code=400, detail="Message is required")

        answer = _use_case(request).execute(
            ChatRequest(text=req.message, context=ConversationContext.from_dict(req.context))
        )
        return QueryResponseModel(
            response=answer.response_text,
            topic=answer.topic,
            suggested_questions=list(answer.suggested_questions),
            context=answer.updated_context.to_dict(),
        )

    @app.post("/api/chatbot/reset", response_model=ResetResponseModel)
    def reset(req: ResetRequestModel, request: Request) -> ResetResponseModel:
        previous = ConversationContext.from_dict(req.context) if req.context else None
        fresh = _use_case(request).reset(previous)
        return ResetResponseModel(context=fresh.to_dict())

    return app
