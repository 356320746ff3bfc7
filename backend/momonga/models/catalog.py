"""Catalog data model — beans, persona types, quiz questions.

JSON documents use camelCase keys; the Python side uses snake_case through
field aliases. All catalog objects are frozen: the catalog is read-only once
loaded.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Score axes are 0..MAX_SCORE. Out-of-range values are kept as-is here and
# clamped by the chart renderer.
MAX_SCORE = 5

AXES: tuple[str, ...] = ("acidity", "bitterness", "body", "aroma", "sweetness")


class _CatalogModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ScoreVector(_CatalogModel):
    acidity: float = 0.0
    bitterness: float = 0.0
    body: float = 0.0
    aroma: float = 0.0
    sweetness: float = 0.0

    def as_list(self) -> list[float]:
        """Axis values in fixed axis order."""
        return [float(getattr(self, axis)) for axis in AXES]


class Choice(_CatalogModel):
    text: str
    scores: dict[str, int] = Field(default_factory=dict)


class Question(_CatalogModel):
    text: str
    choices: tuple[Choice, ...] = Field(..., min_length=1)


class Persona(_CatalogModel):
    """A diagnosis result type ("タイプ")."""

    id: str
    name: str
    description: str = ""
    personality: str | None = None
    emoji: str | None = None
    recommended_bean_ids: tuple[str, ...] = Field(
        default_factory=tuple, alias="recommendedBeanIds"
    )


class BlendComponent(_CatalogModel):
    bean_id: str = Field(..., alias="beanId")
    role: str = ""
    ratio: float | None = None


class Blend(_CatalogModel):
    concept: str = ""
    components: tuple[BlendComponent, ...] = Field(default_factory=tuple)


class Bean(_CatalogModel):
    id: str
    name: str
    roast_label: str = Field("", alias="roastLabel")
    origin: str | None = None
    roast: str | None = None
    description: str = ""
    short_comment: str | None = Field(None, alias="shortComment")
    flavor_notes: tuple[str, ...] = Field(default_factory=tuple, alias="flavorNotes")
    scores: ScoreVector = Field(default_factory=ScoreVector)
    base_url: str | None = Field(None, alias="baseUrl")
    type: str | None = None
    blend: Blend | None = None
    featured: bool = False

    @property
    def is_blend(self) -> bool:
        return self.type == "blend" and self.blend is not None

    @property
    def purchase_url(self) -> str | None:
        """Shop link, or None while the bean is not on sale yet."""
        if self.base_url and self.base_url.strip():
            return self.base_url.strip()
        return None

    @property
    def roast_line(self) -> str:
        return f"{self.roast_label} / {self.origin or self.roast or ''}"
