"""Deck assembly: canonical seven cards plus the 5- and 9-card variants.

Every input here is already contract-valid. The assembler only selects,
orders and renumbers.
"""

from __future__ import annotations

import re
from typing import Sequence

from ..constants import DECK_DEFAULT_SIZE, DECK_SIZES, DECK_SUMMARY_MAX_LENGTH, KEYWORD_MAX_COUNT
from .models import (
    ArticleRecord,
    BeforeAfter,
    CardDeck,
    CardRecord,
    CardType,
    FactSelection,
    ImageSlotAssignment,
    NormalizedCardContent,
)

# Canonical indices kept by the short deck: cover, quote, why, debate, closing
FIVE_CARD_SLOTS: tuple[int, ...] = (0, 1, 4, 5, 6)
# Canonical indices repeated at the end of the long deck: key_fact, why
NINE_CARD_EXTRA_SLOTS: tuple[int, ...] = (3, 4)

_BEFORE_AFTER = re.compile(
    r"BEFORE:\s*([^|]+?)\s*\|\s*AFTER:\s*([^|]+?)(?:\s*\|\s*(.+))?$",
    re.IGNORECASE,
)
_PIPE_SPLIT = re.compile(r"\s*\|\s*")
_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def _to_number(value: str) -> float:
    try:
        return float(_NON_NUMERIC.sub("", value) or 0)
    except ValueError:
        return 0.0


def parse_before_after(text: str | None, default_title: str = "변화 요약") -> BeforeAfter:
    """Parse ``"BEFORE: x | AFTER: y | title"`` (or ``"x | y | title"``).

    Bar percentages scale both values to the larger one; without numbers the
    default 40/100 bars are kept.
    """
    raw = (text or "").strip()
    parsed = BeforeAfter(title=default_title)

    match = _BEFORE_AFTER.search(raw)
    if match:
        before, after, title = match.group(1), match.group(2), match.group(3)
    else:
        parts = _PIPE_SPLIT.split(raw)
        if len(parts) < 2:
            return parsed
        before, after = parts[0], parts[1]
        title = parts[2] if len(parts) > 2 else None

    parsed = parsed.model_copy(update={
        "before_value": before.strip() or parsed.before_value,
        "after_value": after.strip() or parsed.after_value,
        "title": (title or "").strip() or default_title,
    })

    num_before, num_after = _to_number(before), _to_number(after)
    if num_before or num_after:
        top = max(num_before, num_after, 1.0)
        parsed = parsed.model_copy(update={
            "before_percent": max(0.0, min(100.0, num_before / top * 100)),
            "after_percent": max(0.0, min(100.0, num_after / top * 100)),
        })
    return parsed


def _join(*parts: str | None, sep: str = "\n\n") -> str:
    return sep.join(part for part in parts if part)


class DeckAssembler:
    """Build render-ready card decks.

    Usage:
        deck = DeckAssembler().assemble(content, images, facts, article, card_count=5)
    """

    def build_canonical(
        self,
        content: NormalizedCardContent,
        images: ImageSlotAssignment,
        facts: FactSelection,
        article: ArticleRecord,
        keywords: Sequence[str] = (),
    ) -> list[CardRecord]:
        """The seven canonical cards in slot order."""
        image = images.images

        if facts.use_fact_list:
            key_fact = CardRecord(
                slot=4,
                card_type=CardType.KEY_FACT,
                title="핵심 팩트",
                body="\n".join(fact.text for fact in facts.facts),
                image=image[3],
                facts=list(facts.facts),
                before_after=parse_before_after(content.before_after),
            )
        else:
            key_fact = CardRecord(
                slot=4,
                card_type=CardType.KEY_FACT,
                title="문제점 요약",
                body=_join(content.card4_key_sentence, content.card4_explanation, sep="\n"),
                image=image[3],
                before_after=parse_before_after(content.before_after),
            )

        return [
            CardRecord(
                slot=1,
                card_type=CardType.COVER,
                title=content.headline,
                body="",
                image=image[0],
            ),
            CardRecord(
                slot=2,
                card_type=CardType.QUOTE,
                title="핵심 인용",
                body=_join(content.quote, content.quote_speaker, content.quote_context),
                image=image[1],
            ),
            CardRecord(
                slot=3,
                card_type=CardType.CONTEXT,
                title="상황 정리",
                body=_join(content.context_key_line, content.core_problem),
                image=image[2],
            ),
            key_fact,
            CardRecord(
                slot=5,
                card_type=CardType.WHY,
                title="WHY IT MATTERS",
                body=content.why_important,
                image=image[4],
                keywords=[k for k in keywords if k][:KEYWORD_MAX_COUNT],
            ),
            CardRecord(
                slot=6,
                card_type=CardType.DEBATE,
                title=content.pros_cons.question,
                body=_join(content.pros_cons.pros, content.pros_cons.cons, sep="\n"),
                image=image[5],
            ),
            CardRecord(
                slot=7,
                card_type=CardType.CLOSING,
                title="마무리",
                body=content.reader_question,
                image=image[6],
                link=article.source_url or None,
            ),
        ]

    @staticmethod
    def select_variant(cards: Sequence[CardRecord], card_count: int) -> list[CardRecord]:
        """Pick and renumber the cards for a 5, 7 or 9 card deck."""
        if card_count == 5:
            chosen = [cards[i] for i in FIVE_CARD_SLOTS]
        elif card_count == 9:
            chosen = list(cards) + [cards[i] for i in NINE_CARD_EXTRA_SLOTS]
        else:
            chosen = list(cards)
        return [
            card.model_copy(update={"slot": n}, deep=True)
            for n, card in enumerate(chosen, start=1)
        ]

    @staticmethod
    def resolve_card_count(card_count: int | None) -> int:
        """Unsupported counts fall back to the default deck size."""
        return card_count if card_count in DECK_SIZES else DECK_DEFAULT_SIZE

    def assemble(
        self,
        content: NormalizedCardContent,
        images: ImageSlotAssignment,
        facts: FactSelection,
        article: ArticleRecord,
        card_count: int | None = DECK_DEFAULT_SIZE,
        keywords: Sequence[str] = (),
    ) -> CardDeck:
        total = self.resolve_card_count(card_count)
        canonical = self.build_canonical(content, images, facts, article, keywords)
        summary = " ".join(
            part for part in (content.headline.replace("\n", " "), content.why_important) if part
        )
        return CardDeck(
            template_id=f"시사 {total}장",
            cards=self.select_variant(canonical, total),
            summary=summary[:DECK_SUMMARY_MAX_LENGTH],
        )
