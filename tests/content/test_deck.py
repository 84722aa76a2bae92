"""Tests for DeckAssembler and before/after parsing."""

from __future__ import annotations

import pytest

from cardnews_automator.content import (
    CardType,
    DeckAssembler,
    FactEntry,
    FactSelection,
    parse_before_after,
    pool_fill,
)

CANONICAL_TYPES = [
    CardType.COVER,
    CardType.QUOTE,
    CardType.CONTEXT,
    CardType.KEY_FACT,
    CardType.WHY,
    CardType.DEBATE,
    CardType.CLOSING,
]


@pytest.fixture
def images():
    return pool_fill([f"https://img.example.com/{i}.jpg" for i in range(1, 8)])


@pytest.fixture
def facts() -> FactSelection:
    return FactSelection(
        facts=(FactEntry(label="예산", value="656조 원"), FactEntry(label="금리", value="3.5%")),
        source="extracted",
    )


@pytest.fixture
def assembler() -> DeckAssembler:
    return DeckAssembler()


class TestVariants:
    """Tests for 5, 7 and 9 card decks."""

    def test_seven_card_deck(self, assembler, normalized_content, images, facts, sample_article):
        deck = assembler.assemble(normalized_content, images, facts, sample_article, 7)
        assert deck.template_id == "시사 7장"
        assert [c.card_type for c in deck.cards] == CANONICAL_TYPES
        assert [c.slot for c in deck.cards] == list(range(1, 8))
        assert [c.image for c in deck.cards] == images.images

    def test_five_card_deck(self, assembler, normalized_content, images, facts, sample_article):
        deck = assembler.assemble(normalized_content, images, facts, sample_article, 5)
        assert deck.template_id == "시사 5장"
        assert [c.card_type for c in deck.cards] == [
            CardType.COVER, CardType.QUOTE, CardType.WHY, CardType.DEBATE, CardType.CLOSING,
        ]
        assert [c.slot for c in deck.cards] == [1, 2, 3, 4, 5]

    def test_nine_card_deck(self, assembler, normalized_content, images, facts, sample_article):
        deck = assembler.assemble(normalized_content, images, facts, sample_article, 9)
        assert deck.template_id == "시사 9장"
        assert [c.card_type for c in deck.cards] == CANONICAL_TYPES + [CardType.KEY_FACT, CardType.WHY]
        assert [c.slot for c in deck.cards] == list(range(1, 10))

    def test_nine_card_repeats_are_independent(
        self, assembler, normalized_content, images, facts, sample_article
    ):
        """Should give the repeated cards their own facts and keyword lists."""
        deck = assembler.assemble(
            normalized_content, images, facts, sample_article, 9, keywords=["예산", "국회"]
        )
        key_fact, why = deck.cards[3], deck.cards[4]
        key_fact_repeat, why_repeat = deck.cards[7], deck.cards[8]

        assert key_fact_repeat.facts == key_fact.facts
        assert key_fact_repeat.facts is not key_fact.facts
        assert why_repeat.keywords is not why.keywords

        why_repeat.keywords.append("추가")
        assert why.keywords == ["예산", "국회"]

    @pytest.mark.parametrize("count", [0, 3, 6, 8, 10, None])
    def test_unsupported_count_falls_back_to_seven(
        self, assembler, normalized_content, images, facts, sample_article, count
    ):
        deck = assembler.assemble(normalized_content, images, facts, sample_article, count)
        assert deck.total == 7

    def test_variant_does_not_renumber_canonical(self, assembler, normalized_content, images, facts, sample_article):
        canonical = assembler.build_canonical(normalized_content, images, facts, sample_article)
        assembler.select_variant(canonical, 5)
        assert [c.slot for c in canonical] == list(range(1, 8))


class TestCardContent:
    """Tests for the content placed on each card."""

    def test_cover_carries_headline(self, assembler, normalized_content, images, facts, sample_article):
        cards = assembler.build_canonical(normalized_content, images, facts, sample_article)
        assert cards[0].title == normalized_content.headline

    def test_key_fact_card_with_facts(self, assembler, normalized_content, images, facts, sample_article):
        card = assembler.build_canonical(normalized_content, images, facts, sample_article)[3]
        assert card.title == "핵심 팩트"
        assert card.facts == list(facts.facts)
        assert card.body == "예산: 656조 원\n금리: 3.5%"

    def test_key_fact_card_without_facts(self, assembler, normalized_content, images, sample_article):
        card = assembler.build_canonical(normalized_content, images, FactSelection(), sample_article)[3]
        assert card.title == "문제점 요약"
        assert card.facts == []
        assert normalized_content.card4_key_sentence in card.body

    def test_why_card_keywords_capped(self, assembler, normalized_content, images, facts, sample_article):
        keywords = ["예산", "국회", "재정", "민생", "복지", "일자리"]
        card = assembler.build_canonical(normalized_content, images, facts, sample_article, keywords)[4]
        assert card.keywords == keywords[:5]

    def test_closing_links_source(self, assembler, normalized_content, images, facts, sample_article):
        card = assembler.build_canonical(normalized_content, images, facts, sample_article)[6]
        assert card.link == sample_article.source_url
        assert card.body == normalized_content.reader_question

    def test_summary_bounded(self, assembler, normalized_content, images, facts, sample_article):
        deck = assembler.assemble(normalized_content, images, facts, sample_article)
        assert 0 < len(deck.summary) <= 200
        assert "\n" not in deck.summary


class TestBeforeAfter:
    """Tests for parse_before_after."""

    def test_labelled_form(self):
        parsed = parse_before_after("BEFORE: 100억 | AFTER: 200억 | 예산 변화")
        assert parsed.before_value == "100억"
        assert parsed.after_value == "200억"
        assert parsed.title == "예산 변화"
        assert parsed.before_percent == pytest.approx(50.0)
        assert parsed.after_percent == pytest.approx(100.0)

    def test_pipe_form(self):
        parsed = parse_before_after("3% | 5%")
        assert (parsed.before_value, parsed.after_value) == ("3%", "5%")
        assert parsed.title == "변화 요약"
        assert parsed.before_percent == pytest.approx(60.0)

    def test_without_numbers_keeps_default_bars(self):
        parsed = parse_before_after("이전 | 이후 | 제도 변화")
        assert parsed.title == "제도 변화"
        assert (parsed.before_percent, parsed.after_percent) == (40.0, 100.0)

    @pytest.mark.parametrize("text", [None, "", "변화 없음"])
    def test_unparseable_gives_defaults(self, text):
        parsed = parse_before_after(text)
        assert parsed.before_value == "—"
        assert parsed.title == "변화 요약"
