"""Key fact selection for the key-fact card.

Facts are short ``label: value`` pairs. AI-supplied facts are preferred; when
fewer than three survive validation, pattern extractors run over the article
text in a fixed order:

    1. numeric     - currency amounts, percentages, dates
    2. proper noun - places, people before role titles, organizations, designations
    3. outcome     - short clauses ending at a change/outcome keyword

Every candidate, AI or extracted, goes through the same validator and lands
in one capped, case-insensitively deduplicated list.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator

from ..constants import (
    FACT_LABEL_MAX_LENGTH,
    FACT_LABEL_MIN_LENGTH,
    FACT_MAX_COUNT,
    FACT_MIN_AI_COUNT,
    FACT_PERCENT_MAX,
    FACT_PERCENT_MIN,
    FACT_VALUE_MAX_LENGTH,
    FACT_VALUE_MAX_WORDS,
)
from .models import ArticleRecord, FactEntry, FactSelection, NormalizedCardContent
from .suffixes import KOREAN_SUFFIXES, SuffixTable

_logger = logging.getLogger("cardnews")

_LABEL_SEPARATOR = re.compile(r"\s*[:：]\s*")
_WHITESPACE = re.compile(r"\s+")
_PERCENT = re.compile(r"(-?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?)\s*(?:%|％|퍼센트)")
_LABEL_DECORATION = "-•·*# "


# =============================================================================
# PATTERN TABLES
# =============================================================================

_CURRENCY = re.compile(
    r"\d[\d,]*(?:\.\d+)?\s*(?:조|억|만|천)?(?:\s*\d[\d,]*\s*(?:억|만|천))?\s*(?:원|달러|엔|위안|유로)"
)
_PERCENTAGE = re.compile(r"(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?\s*(?:%|％|퍼센트)(?:\s*포인트)?")
_DATE = re.compile(r"\d{4}년(?:\s*\d{1,2}월)?(?:\s*\d{1,2}일)?|\d{1,2}월\s*\d{1,2}일")

# (keyword, label) in priority order; searched in the text just before a match
MONEY_LABELS: tuple[tuple[str, str], ...] = (
    ("예산", "예산"),
    ("매출", "매출"),
    ("영업이익", "영업이익"),
    ("투자", "투자액"),
    ("부채", "부채"),
    ("손실", "손실액"),
    ("피해", "피해액"),
    ("지원", "지원금"),
    ("가격", "가격"),
    ("임금", "임금"),
    ("세수", "세수"),
)
PERCENT_LABELS: tuple[tuple[str, str], ...] = (
    ("금리", "금리"),
    ("실업률", "실업률"),
    ("물가", "물가상승률"),
    ("지지율", "지지율"),
    ("투표율", "투표율"),
    ("성장률", "성장률"),
    ("점유율", "점유율"),
    ("감소", "감소율"),
    ("하락", "하락률"),
    ("상승", "상승률"),
    ("증가", "증가율"),
)
DATE_LABELS: tuple[tuple[str, str], ...] = (
    ("시행", "시행일"),
    ("발표", "발표일"),
    ("개최", "개최일"),
    ("마감", "마감일"),
    ("출범", "출범일"),
    ("선거", "선거일"),
)
_CONTEXT_WINDOW = 20

PLACES: tuple[str, ...] = (
    "서울", "부산", "대구", "인천", "광주", "대전", "울산", "세종", "제주",
    "경기도", "강원도", "충청북도", "충청남도", "전라북도", "전라남도",
    "경상북도", "경상남도", "미국", "중국", "일본", "러시아", "북한",
    "영국", "프랑스", "독일", "우크라이나", "이스라엘", "유럽",
    "워싱턴", "베이징", "도쿄", "평양", "뉴욕", "런던",
)
_PLACE = re.compile("|".join(sorted(PLACES, key=len, reverse=True)))

ROLE_TITLES: tuple[str, ...] = (
    "원내대표", "대변인", "위원장", "이사장", "대통령", "총리", "장관", "차관",
    "의원", "대표", "회장", "사장", "시장", "지사", "교수", "청장", "감독",
)
_PERSON = re.compile(
    r"(?<![가-힣])([가-힣]{2,4})\s*(" + "|".join(ROLE_TITLES) + r")"
)
NAME_STOPWORDS: frozenset[str] = frozenset({
    "이날", "당시", "이번", "해당", "신임", "전직", "현직", "관계자", "우리",
    "정부", "여당", "야당", "국회", "국무", "그는", "그러나", "한편", "또한",
})

ORG_SUFFIXES: tuple[str, ...] = (
    "위원회", "공사", "공단", "은행", "그룹", "전자", "협회", "연구원",
    "재단", "검찰청", "경찰청", "법원", "노조",
)
_ORGANIZATION = re.compile(
    r"(?<![가-힣])([가-힣]{2,8}(?:" + "|".join(ORG_SUFFIXES) + r"))"
)
_ACRONYM = re.compile(r"(?<![A-Za-z])([A-Z][A-Z0-9]{2,5})(?![A-Za-z])")
ACRONYM_STOPWORDS: frozenset[str] = frozenset({
    "CEO", "CFO", "CTO", "GDP", "USD", "KRW", "BEFORE", "AFTER", "WHY", "NEWS", "THE",
})
_DESIGNATION = re.compile(r"[\"“'‘]([^\"”'’\n]{2,20})[\"”'’]")

# (keyword stem, label) - the clause is cut right after the stem
OUTCOME_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("증가", "변화"), ("감소", "변화"), ("상승", "변화"), ("하락", "변화"),
    ("확대", "변화"), ("축소", "변화"), ("인상", "변화"), ("인하", "변화"),
    ("급등", "변화"), ("급락", "변화"),
    ("통과", "결과"), ("타결", "결과"), ("합의", "결과"), ("승인", "결과"),
    ("부결", "결과"), ("무산", "결과"), ("체결", "결과"),
    ("도입", "조치"), ("시행", "조치"), ("추진", "조치"), ("폐지", "조치"),
    ("중단", "조치"), ("착수", "조치"),
)
_OUTCOME = re.compile("|".join(stem for stem, _ in OUTCOME_KEYWORDS))
_OUTCOME_LABELS = dict(OUTCOME_KEYWORDS)
_CLAUSE_BREAK = re.compile(r"[!?。,\n]|\.(?!\d)")
_OUTCOME_MAX_WORDS = 4


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _label_before(text: str, start: int, table: tuple[tuple[str, str], ...]) -> str | None:
    window = text[max(0, start - _CONTEXT_WINDOW):start]
    for keyword, label in table:
        if keyword in window:
            return label
    return None


# =============================================================================
# FACT LIST
# =============================================================================


class FactList:
    """Capped, deduplicated list shared by the validator and extractors."""

    def __init__(self, validator: "FactExtractionChain", limit: int = FACT_MAX_COUNT):
        self._validator = validator
        self._limit = limit
        self._entries: list[FactEntry] = []
        self._keys: set[str] = set()

    def add(self, raw: str) -> bool:
        """Validate and append one ``label: value`` entry."""
        if self.is_full:
            return False
        entry = self._validator.validate_fact(raw)
        if entry is None or entry.key in self._keys:
            return False
        self._entries.append(entry)
        self._keys.add(entry.key)
        return True

    def extend(self, raw_facts: Iterable[str]) -> int:
        added = 0
        for raw in raw_facts:
            if self.is_full:
                break
            if self.add(raw):
                added += 1
        return added

    @property
    def is_full(self) -> bool:
        return len(self._entries) >= self._limit

    @property
    def entries(self) -> tuple[FactEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


# =============================================================================
# CHAIN
# =============================================================================


class FactExtractionChain:
    """Produce 0-5 key facts for a deck.

    Usage:
        chain = FactExtractionChain()
        selection = chain.select(raw.ai_facts, article, normalized_content)

        if selection.use_fact_list:
            ...  # render selection.facts
        else:
            ...  # render key sentence + explanation
    """

    def __init__(self, suffixes: SuffixTable = KOREAN_SUFFIXES):
        self.suffixes = suffixes

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate_fact(self, raw: str) -> FactEntry | None:
        """Parse and check one fact. Returns None when it is rejected."""
        parts = _LABEL_SEPARATOR.split(str(raw or "").strip(), maxsplit=1)
        if len(parts) != 2:
            return None

        label = _collapse(parts[0]).strip(_LABEL_DECORATION)
        value = _collapse(parts[1])
        if not FACT_LABEL_MIN_LENGTH <= len(label) <= FACT_LABEL_MAX_LENGTH:
            return None
        if not value or len(value.split(" ")) > FACT_VALUE_MAX_WORDS:
            return None

        for match in _PERCENT.finditer(value):
            if not FACT_PERCENT_MIN <= float(match.group(1).replace(",", "")) <= FACT_PERCENT_MAX:
                return None

        value = value[:FACT_VALUE_MAX_LENGTH].strip()
        if not value or self.suffixes.ends_sentence(value):
            return None
        return FactEntry(label=label, value=value)

    def validate_facts(self, raw_facts: Iterable[str]) -> list[FactEntry]:
        facts = FactList(self)
        facts.extend(raw_facts)
        return list(facts.entries)

    # -------------------------------------------------------------------------
    # Extractors
    # -------------------------------------------------------------------------

    def extract_numeric(self, text: str) -> Iterator[str]:
        """Currency amounts, then percentages, then dates."""
        for match in _CURRENCY.finditer(text):
            label = _label_before(text, match.start(), MONEY_LABELS) or "금액"
            yield f"{label}: {_collapse(match.group(0))}"

        for match in _PERCENTAGE.finditer(text):
            label = _label_before(text, match.start(), PERCENT_LABELS) or "증가율"
            yield f"{label}: {_collapse(match.group(0))}"

        for match in _DATE.finditer(text):
            value = _collapse(match.group(0))
            default = "연도" if "년" in value else "날짜"
            label = _label_before(text, match.start(), DATE_LABELS) or default
            yield f"{label}: {value}"

    def extract_proper_nouns(self, text: str) -> Iterator[str]:
        """First place, person, organization and designation found."""
        place = _PLACE.search(text)
        if place:
            yield f"장소: {place.group(0)}"

        for match in _PERSON.finditer(text):
            name, title = match.group(1), match.group(2)
            if name not in NAME_STOPWORDS:
                yield f"인물: {name} {title}"
                break

        organization = _ORGANIZATION.search(text)
        if organization:
            yield f"기관: {organization.group(1)}"
        else:
            for match in _ACRONYM.finditer(text):
                if match.group(1) not in ACRONYM_STOPWORDS:
                    yield f"기관: {match.group(1)}"
                    break

        designation = _DESIGNATION.search(text)
        if designation:
            yield f"명칭: {designation.group(1).strip()}"

    def extract_outcomes(self, text: str) -> Iterator[str]:
        """Short clauses ending at a change or outcome keyword, one per label."""
        seen_labels: set[str] = set()
        for match in _OUTCOME.finditer(text):
            label = _OUTCOME_LABELS[match.group(0)]
            if label in seen_labels:
                continue

            clause_start = 0
            for brk in _CLAUSE_BREAK.finditer(text, 0, match.start()):
                clause_start = brk.end()
            words = text[clause_start:match.end()].split()
            if len(words) < 2:
                continue

            seen_labels.add(label)
            yield f"{label}: {' '.join(words[-_OUTCOME_MAX_WORDS:])}"

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    @staticmethod
    def source_text(article: ArticleRecord, content: NormalizedCardContent | None) -> str:
        parts = [article.title, article.body_text]
        if content is not None:
            parts += [content.core_problem, content.card4_key_sentence, content.card4_explanation]
        return "\n".join(part for part in parts if part)

    def select(
        self,
        ai_facts: Iterable[str] | None,
        article: ArticleRecord,
        content: NormalizedCardContent | None = None,
    ) -> FactSelection:
        """Choose the facts shown on the key-fact card."""
        facts = FactList(self)
        ai_count = facts.extend(ai_facts or [])
        if ai_count >= FACT_MIN_AI_COUNT:
            _logger.info(f"Key facts: {ai_count} AI facts accepted")
            return FactSelection(facts=facts.entries, source="ai")

        text = self.source_text(article, content)
        extracted = 0
        for extractor in (self.extract_numeric, self.extract_proper_nouns, self.extract_outcomes):
            if facts.is_full:
                break
            extracted += facts.extend(extractor(text))

        if extracted:
            _logger.info(
                f"Key facts: {ai_count} AI + {extracted} extracted ({len(facts)} total)"
            )
            return FactSelection(facts=facts.entries, source="extracted")

        _logger.info(f"Key facts: none usable ({ai_count} AI), using text format")
        return FactSelection(facts=(), source="none")
