"""Data models for card news generation."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..constants import DECK_SIZES, IMAGE_SLOT_COUNT


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# INPUT
# =============================================================================


class ArticleRecord(CamelModel):
    """A scraped news article. Read-only input to the pipeline."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    body_text: str = ""
    source_url: str = ""
    category: str = ""
    image_urls: tuple[str, ...] = ()
    author: str = ""

    @field_validator("title", "body_text", "source_url", "category", "author", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("image_urls", mode="before")
    @classmethod
    def _dedupe_images(cls, value: Any) -> tuple[str, ...]:
        if not value:
            return ()
        if isinstance(value, str):
            value = [value]
        seen: list[str] = []
        for url in value:
            url = str(url or "").strip()
            if url and url not in seen:
                seen.append(url)
        return tuple(seen[:IMAGE_SLOT_COUNT])

    @property
    def is_empty(self) -> bool:
        """True when the article carries neither title nor body."""
        return not self.title.strip() and not self.body_text.strip()


class GenerationOptions(CamelModel):
    """User options that shape the generation prompt."""

    tone: int = 50
    length: Literal["auto", "short", "explanatory"] = "auto"
    speech_style: Literal["auto", "report", "cardnews"] = "auto"
    keyword_emphasis: bool = False

    @field_validator("tone", mode="before")
    @classmethod
    def _clamp_tone(cls, value: Any) -> int:
        try:
            tone = int(value)
        except (TypeError, ValueError):
            return 50
        return max(0, min(100, tone))


# =============================================================================
# RAW PROVIDER OUTPUT
# =============================================================================


def _coerce_text(value: Any) -> Any:
    """Coerce JSON scalars to strings, leave structures to validation."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        return " ".join(str(item) for item in value if item is not None)
    return value


class RawProsCons(CamelModel):
    """Debate card fields as returned by a provider."""

    question: str | None = None
    pros: str | None = None
    cons: str | None = None

    @field_validator("question", "pros", "cons", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        return _coerce_text(value)


class RawKeyFact(CamelModel):
    """Optional key facts block. Entries are ``"label: value"`` strings."""

    facts: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_list(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {"facts": data}
        return data

    @field_validator("facts", mode="before")
    @classmethod
    def _coerce_facts(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        facts: list[str] = []
        for item in value:
            if isinstance(item, dict):
                label = str(item.get("label") or "").strip()
                fact_value = str(item.get("value") or "").strip()
                if label or fact_value:
                    facts.append(f"{label}: {fact_value}")
            elif item is not None:
                facts.append(str(item))
        return facts


class RawGenerationResult(CamelModel):
    """Fields returned by one provider attempt (or the extractive fallback).

    Only the headline is required. Everything else is repaired downstream.
    """

    headline: str
    quote: str | None = None
    quote_speaker: str | None = None
    quote_context: str | None = None
    context_key_line: str | None = None
    core_problem: str | None = None
    card4_key_sentence: str | None = None
    card4_explanation: str | None = None
    before_after: str | None = None
    why_important: str | None = None
    pros_cons: RawProsCons = Field(default_factory=RawProsCons)
    reader_question: str | None = None
    key_fact: RawKeyFact | None = None

    @field_validator(
        "headline",
        "quote",
        "quote_speaker",
        "quote_context",
        "context_key_line",
        "core_problem",
        "card4_key_sentence",
        "card4_explanation",
        "before_after",
        "why_important",
        "reader_question",
        mode="before",
    )
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        return _coerce_text(value)

    @field_validator("headline")
    @classmethod
    def _headline_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("headline must not be empty")
        return value

    @field_validator("pros_cons", mode="before")
    @classmethod
    def _pros_cons_object(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, RawProsCons)) else {}

    @field_validator("key_fact", mode="before")
    @classmethod
    def _key_fact_shape(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, list, RawKeyFact)) else None

    @property
    def ai_facts(self) -> list[str]:
        """Facts supplied by the provider, possibly empty."""
        return list(self.key_fact.facts) if self.key_fact else []


# =============================================================================
# NORMALIZED CONTENT
# =============================================================================


class ProsCons(CamelModel):
    """Normalized debate card fields."""

    question: str
    pros: str
    cons: str


class NormalizedCardContent(CamelModel):
    """Card text where every field satisfies its contract."""

    headline: str
    quote: str
    quote_speaker: str
    quote_context: str
    context_key_line: str
    core_problem: str
    card4_key_sentence: str
    card4_explanation: str
    before_after: str
    why_important: str
    pros_cons: ProsCons
    reader_question: str

    @property
    def headline_lines(self) -> list[str]:
        return self.headline.split("\n")


# =============================================================================
# FACTS
# =============================================================================


class FactEntry(CamelModel):
    """A short ``label: value`` fact shown on the key-fact card."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str

    @property
    def text(self) -> str:
        return f"{self.label}: {self.value}"

    @property
    def key(self) -> str:
        """Case-insensitive identity used for deduplication."""
        return self.text.casefold()


class FactSelection(CamelModel):
    """Outcome of the fact extraction chain."""

    model_config = ConfigDict(frozen=True)

    facts: tuple[FactEntry, ...] = ()
    source: Literal["ai", "extracted", "none"] = "none"

    @property
    def use_fact_list(self) -> bool:
        """False means the key-fact card shows key sentence + explanation."""
        return bool(self.facts)


# =============================================================================
# IMAGES
# =============================================================================

ImageSource = Literal["article", "generated", "pool", "inline", "placeholder"]


class ImageSlotAssignment(CamelModel):
    """Exactly seven image references, one per canonical card slot."""

    images: list[str]
    sources: list[ImageSource]

    @model_validator(mode="after")
    def _seven_filled_slots(self) -> "ImageSlotAssignment":
        if len(self.images) != IMAGE_SLOT_COUNT or len(self.sources) != IMAGE_SLOT_COUNT:
            raise ValueError(f"expected {IMAGE_SLOT_COUNT} image slots, got {len(self.images)}")
        if any(not image or not image.strip() for image in self.images):
            raise ValueError("image slots must not be empty")
        return self

    @property
    def placeholder_count(self) -> int:
        return self.sources.count("placeholder")


# =============================================================================
# DECK
# =============================================================================


class CardType(str, Enum):
    """Semantic type of a card slot."""

    COVER = "cover"
    QUOTE = "quote"
    CONTEXT = "context"
    KEY_FACT = "key_fact"
    WHY = "why"
    DEBATE = "debate"
    CLOSING = "closing"


class BeforeAfter(CamelModel):
    """Before/after comparison parsed for the key-fact card chart."""

    before_label: str = "BEFORE"
    after_label: str = "AFTER"
    before_value: str = "—"
    after_value: str = "—"
    title: str = "변화 요약"
    before_percent: float = 40.0
    after_percent: float = 100.0


class CardRecord(CamelModel):
    """One render-ready card."""

    slot: int
    card_type: CardType
    title: str
    body: str
    image: str
    facts: list[FactEntry] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    before_after: BeforeAfter | None = None
    link: str | None = None


class CardDeck(CamelModel):
    """Ordered cards ready for the renderer."""

    template_id: str
    cards: list[CardRecord]
    summary: str = ""

    @model_validator(mode="after")
    def _supported_size(self) -> "CardDeck":
        if len(self.cards) not in DECK_SIZES:
            raise ValueError(f"deck size must be one of {DECK_SIZES}, got {len(self.cards)}")
        return self

    @property
    def total(self) -> int:
        return len(self.cards)


class Badge(CamelModel):
    """Corner badge parsed from an article title such as ``[단독]``."""

    type: str
    text: str
    color: str
    bg_color: str


class SnsCopy(CamelModel):
    """Share copy for the finished deck."""

    instagram: str
    facebook: str
    hashtags: list[str] = Field(default_factory=list)
    summary_lines: list[str] = Field(default_factory=list)


class GenerationReport(CamelModel):
    """Which strategy produced the raw content and what failed before it."""

    strategy: str
    model: str | None = None
    failed_attempts: list[str] = Field(default_factory=list)


class DeckResult(CamelModel):
    """Core output consumed by the renderer."""

    normalized_content: NormalizedCardContent
    images: ImageSlotAssignment
    deck: CardDeck
    fact_selection: FactSelection
    keywords: list[str] = Field(default_factory=list)
    category: str = "default"
    category_label: str = "일반"
    badge: Badge | None = None
    sns: SnsCopy | None = None
    generation: GenerationReport | None = None

    def to_payload(self) -> dict[str, Any]:
        """JSON-serializable camelCase payload."""
        return self.model_dump(mode="json", by_alias=True)
