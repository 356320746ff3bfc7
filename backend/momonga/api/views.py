"""Presenter view state -> JSON view models."""

from __future__ import annotations

from momonga.engine.presenter import QuestionState, Screen, ViewState
from momonga.engine.selector import (
    DEFAULT_EMOJI,
    SHARE_TITLE,
    BlendPart,
    Recommendation,
    alternate_message,
    share_text,
)
from momonga.models.catalog import AXES, Bean, Persona
from momonga.models.responses import (
    AlternateCard,
    BeanCard,
    BlendPartView,
    BlendView,
    ChoiceView,
    PersonaCard,
    QuestionView,
    ResultView,
    ViewResponse,
)

PURCHASE_LABEL = "BASEで購入する →"
ALTERNATE_LABEL = "こちらも見る →"
BLEND_PART_LABEL = "ストレートで試す →"
NOT_ON_SALE_LABEL = "準備中 🫖"


def bean_card(bean: Bean, purchase_label: str = PURCHASE_LABEL) -> BeanCard:
    url = bean.purchase_url
    return BeanCard(
        id=bean.id,
        name=bean.name,
        roast_line=bean.roast_line,
        description=bean.description,
        short_comment=bean.short_comment,
        flavor_notes=list(bean.flavor_notes),
        scores={axis: float(getattr(bean.scores, axis)) for axis in AXES},
        purchase_url=url,
        purchase_label=purchase_label if url else NOT_ON_SALE_LABEL,
        is_blend=bean.is_blend,
    )


def persona_card(persona: Persona) -> PersonaCard:
    return PersonaCard(
        id=persona.id,
        name=persona.name,
        description=persona.description,
        personality=persona.personality or "",
        emoji=persona.emoji or DEFAULT_EMOJI,
    )


def question_view(state: QuestionState, advance_after_ms: int = 0) -> QuestionView:
    return QuestionView(
        index=state.index,
        total=state.total,
        text=state.question.text,
        choices=[ChoiceView(index=i, text=c.text) for i, c in enumerate(state.question.choices)],
        progress_pct=round((state.index + 1) / state.total * 100, 1),
        advance_after_ms=advance_after_ms,
    )


def result_view(rec: Recommendation) -> ResultView:
    alternate = None
    if rec.alternate is not None and rec.alternate_persona is not None:
        alternate = AlternateCard(
            bean=bean_card(rec.alternate, ALTERNATE_LABEL),
            persona=persona_card(rec.alternate_persona),
            message=alternate_message(rec.alternate, rec.alternate_persona),
        )
    return ResultView(
        persona=persona_card(rec.persona),
        bean=bean_card(rec.bean),
        alternate=alternate,
        omakase=rec.omakase,
        share_title=SHARE_TITLE,
        share_text=share_text(rec.persona.name),
    )


def blend_view(bean: Bean, parts: tuple[BlendPart, ...]) -> BlendView:
    return BlendView(
        bean_id=bean.id,
        title=f"🔍 {bean.name} の中身",
        concept=bean.blend.concept if bean.blend else "",
        parts=[
            BlendPartView(
                role=p.component.role,
                ratio=p.component.ratio,
                bean=bean_card(p.bean, BLEND_PART_LABEL),
            )
            for p in parts
        ],
    )


def build_view(session_id: str, view: ViewState, advance_after_ms: int = 0) -> ViewResponse:
    """Only the current screen's payload is included."""
    screen = view.screen
    response = ViewResponse(
        session_id=session_id,
        screen=screen.value,
        charts=dict(view.charts),
        notifications=list(view.notifications),
    )
    if screen is Screen.DIAGNOSIS and view.question is not None:
        response.question = question_view(view.question, advance_after_ms)
    elif screen is Screen.RESULT and view.result is not None:
        response.result = result_view(view.result)
    elif screen is Screen.GACHA and view.gacha is not None:
        response.gacha = bean_card(view.gacha)
    elif screen is Screen.BLEND and view.blend is not None:
        response.blend = blend_view(*view.blend)
    return response
