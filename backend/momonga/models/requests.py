"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AnswerRequest(BaseModel):
    question_index: int = Field(..., ge=0, description="Index of the question being answered")
    choice_index: int = Field(..., ge=0, description="Index of the chosen answer")
