"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    catalog_loaded: bool = False
    beans: int = 0
    types: int = 0
    questions: int = 0


class ChoiceView(BaseModel):
    index: int
    text: str


class QuestionView(BaseModel):
    index: int
    total: int
    text: str
    choices: list[ChoiceView] = Field(default_factory=list)
    progress_pct: float = 0.0
    # UI pacing hint: wait this long before showing the next question
    advance_after_ms: int = 0


class PersonaCard(BaseModel):
    id: str
    name: str
    description: str = ""
    personality: str = ""
    emoji: str = ""


class BeanCard(BaseModel):
    id: str
    name: str
    roast_line: str = ""
    description: str = ""
    short_comment: str | None = None
    flavor_notes: list[str] = Field(default_factory=list)
    scores: dict[str, float] = Field(default_factory=dict)
    purchase_url: str | None = None
    purchase_label: str = ""
    is_blend: bool = False


class AlternateCard(BaseModel):
    bean: BeanCard
    persona: PersonaCard
    message: str


class ResultView(BaseModel):
    persona: PersonaCard
    bean: BeanCard
    alternate: AlternateCard | None = None
    omakase: bool = False
    share_title: str = ""
    share_text: str = ""


class BlendPartView(BaseModel):
    role: str = ""
    ratio: float | None = None
    bean: BeanCard


class BlendView(BaseModel):
    bean_id: str
    title: str
    concept: str = ""
    parts: list[BlendPartView] = Field(default_factory=list)


class ViewResponse(BaseModel):
    session_id: str
    screen: str
    question: QuestionView | None = None
    result: ResultView | None = None
    gacha: BeanCard | None = None
    blend: BlendView | None = None
    # Chart target id -> SVG markup
    charts: dict[str, str] = Field(default_factory=dict)
    notifications: list[str] = Field(default_factory=list)


class CatalogTypeView(BaseModel):
    id: str
    name: str
    emoji: str = ""
    recommended_bean_ids: list[str] = Field(default_factory=list)
