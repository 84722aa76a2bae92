"""Field normalization for generated card text.

Provider output is unreliable: headlines run long and end mid-phrase, quotes
carry reporter attribution, optional fields go missing. FieldNormalizer
repairs every field so that it satisfies its FieldContract, or replaces it
with the contract's fallback text. It never raises.
"""

from __future__ import annotations

import logging
import re

from ..constants import (
    FIELD_CONTRACTS,
    HEADLINE_GENERIC_FALLBACK,
    HEADLINE_GENERIC_SUFFIX,
    HEADLINE_LINE_MAX_LENGTH,
    HEADLINE_LINE_MIN_LENGTH,
    HEADLINE_MAX_LINES,
    HEADLINE_TITLE_PREFIX_LENGTH,
    HEADLINE_TRIM_MAX_ITERATIONS,
    QUOTE_FALLBACK,
    QUOTE_MAX_LENGTH,
    QUOTE_TRIM_MAX_PASSES,
    FieldContract,
)
from .badges import strip_badges
from .models import ArticleRecord, NormalizedCardContent, ProsCons, RawGenerationResult
from .suffixes import KOREAN_SUFFIXES, SuffixTable

_logger = logging.getLogger("cardnews")

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WHITESPACE = re.compile(r"\s+")
_QUOTE_ELLIPSIS_RUN = re.compile(r"[\"“”….]{2,}")
_QUOTE_CHARS = re.compile(r"[\"“”‘’'「」『』]")
_REPEATED_PUNCT = re.compile(r"([.!?,~])\1+")
_TERMINAL = re.compile(r"[.!?]$")
_SENTENCE_END = re.compile(r"[.!?。]")
_SURROUNDING_QUOTES = "\"'“”‘’「」『』 "

# Bound on attribution-removal passes
_ATTRIBUTION_MAX_PASSES = 5

# Headline length used when the headline itself is empty
_EMPTY_HEADLINE_TITLE_LENGTH = 30


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


class FieldNormalizer:
    """Enforce per-field contracts on raw generation output.

    Usage:
        normalizer = FieldNormalizer()
        content = normalizer.normalize(raw_result, article)

        # Single fields
        normalizer.normalize_headline("정부 예산안\\n국회 통과 논란", title)
        normalizer.normalize_quote('"물가를 잡겠다"라고 말했다')
    """

    def __init__(
        self,
        suffixes: SuffixTable = KOREAN_SUFFIXES,
        contracts: dict[str, FieldContract] | None = None,
    ):
        self.suffixes = suffixes
        self.contracts = contracts or FIELD_CONTRACTS

    # =========================================================================
    # HEADLINE
    # =========================================================================

    def _clean_headline_line(self, line: str) -> str:
        line = _QUOTE_CHARS.sub("", line)
        line = _QUOTE_ELLIPSIS_RUN.sub("", line)
        line = _collapse(line)[:HEADLINE_LINE_MAX_LENGTH].strip()

        for _ in range(HEADLINE_TRIM_MAX_ITERATIONS):
            trimmed = self.suffixes.trim_headline_once(line)
            if trimmed == line:
                break
            line = trimmed
        return line

    def _is_acceptable_line(self, line: str) -> bool:
        return (
            len(line) >= HEADLINE_LINE_MIN_LENGTH
            and not self.suffixes.has_bad_headline_end(line)
        )

    def _title_line(self, title: str) -> str:
        """Replacement headline line derived from the article title."""
        base = strip_badges(title)
        candidate = self._clean_headline_line(base[:HEADLINE_TITLE_PREFIX_LENGTH])
        if self._is_acceptable_line(candidate):
            return candidate

        prefix = _collapse(_QUOTE_ELLIPSIS_RUN.sub("", _QUOTE_CHARS.sub("", base)))
        # Leave room for " 이슈" within the line limit
        room = HEADLINE_LINE_MAX_LENGTH - len(HEADLINE_GENERIC_SUFFIX) - 1
        prefix = prefix[:room].strip()
        if not prefix:
            return HEADLINE_GENERIC_FALLBACK
        return f"{prefix} {HEADLINE_GENERIC_SUFFIX}"

    def normalize_headline(self, headline: str | None, title: str = "") -> str:
        """Return one or two headline lines joined by a newline."""
        source = (headline or "").strip()
        if not source:
            source = strip_badges(title)[:_EMPTY_HEADLINE_TITLE_LENGTH]

        raw_lines = [line for line in _LINE_BREAK.split(source) if line.strip()]
        raw_lines = raw_lines[:HEADLINE_MAX_LINES] or [""]

        lines: list[str] = []
        for raw_line in raw_lines:
            line = self._clean_headline_line(raw_line)
            if not self._is_acceptable_line(line):
                _logger.debug(f"Headline line rejected: {raw_line!r} -> {line!r}")
                line = self._title_line(title)
            if line not in lines:
                lines.append(line)

        return "\n".join(lines)

    # =========================================================================
    # QUOTE
    # =========================================================================

    def _strip_trailing_particles(self, text: str) -> str:
        for _ in range(QUOTE_TRIM_MAX_PASSES):
            trimmed = self.suffixes.quote_trailing.sub("", text).strip()
            if trimmed == text:
                break
            text = trimmed
        return text

    def _clean_quote(self, text: str) -> str:
        text = text.strip().strip(_SURROUNDING_QUOTES)
        text = text.replace("…", "")
        text = _REPEATED_PUNCT.sub(r"\1", text)
        text = _collapse(text)

        for _ in range(_ATTRIBUTION_MAX_PASSES):
            stripped = text
            for rule in self.suffixes.attributions:
                stripped = rule.apply(stripped)
            stripped = stripped.strip(_SURROUNDING_QUOTES)
            if stripped == text:
                break
            text = stripped

        text = _REPEATED_PUNCT.sub(r"\1", text)
        text = self._strip_trailing_particles(text)
        if not text.strip(".!?, "):
            return ""
        if not _TERMINAL.search(text):
            text = f"{text}."
        return text

    def normalize_quote(self, quote: str | None) -> str:
        """Clean a quote, then truncate it to the quote limit."""
        text = self._clean_quote(quote or "")
        if len(text) > QUOTE_MAX_LENGTH:
            # Cut last, then re-clean the cut tail
            text = self._clean_quote(text[: QUOTE_MAX_LENGTH - 1].rstrip(".!?, "))
        return text or QUOTE_FALLBACK

    # =========================================================================
    # GENERIC FIELDS
    # =========================================================================

    def normalize_text(
        self,
        value: str | None,
        contract: FieldContract,
        fallback: str | None = None,
    ) -> str:
        """Trim and truncate a plain text field to its contract."""
        text = _collapse(value or "")

        if contract.max_words is not None:
            words = text.split(" ")
            if len(words) > contract.max_words:
                text = " ".join(words[: contract.max_words])

        if len(text) > contract.max_length:
            text = text[: contract.max_length].strip()
            if contract.sentence_final:
                ends = list(_SENTENCE_END.finditer(text))
                if ends and ends[-1].end() > 1:
                    text = text[: ends[-1].end()]

        if text:
            return text
        if fallback is not None:
            return self.normalize_text(fallback, contract)
        return contract.fallback

    def _field(self, name: str, value: str | None, fallback: str | None = None) -> str:
        return self.normalize_text(value, self.contracts[name], fallback)

    # =========================================================================
    # WHOLE RESULT
    # =========================================================================

    def normalize(
        self,
        raw: RawGenerationResult,
        article: ArticleRecord | None = None,
    ) -> NormalizedCardContent:
        """Normalize every field of a raw generation result."""
        title = article.title if article else ""
        core_problem = self._field("core_problem", raw.core_problem)

        return NormalizedCardContent(
            headline=self.normalize_headline(raw.headline, title),
            quote=self.normalize_quote(raw.quote),
            quote_speaker=self._field("quote_speaker", raw.quote_speaker),
            quote_context=self._field("quote_context", raw.quote_context),
            context_key_line=self._field("context_key_line", raw.context_key_line),
            core_problem=core_problem,
            card4_key_sentence=self._field(
                "card4_key_sentence", raw.card4_key_sentence, raw.core_problem
            ),
            card4_explanation=self._field(
                "card4_explanation", raw.card4_explanation, raw.core_problem
            ),
            before_after=self._field("before_after", raw.before_after),
            why_important=self._field("why_important", raw.why_important),
            pros_cons=ProsCons(
                question=self._field("pros_cons_question", raw.pros_cons.question),
                pros=self._field("pros_cons_pros", raw.pros_cons.pros),
                cons=self._field("pros_cons_cons", raw.pros_cons.cons),
            ),
            reader_question=self._field("reader_question", raw.reader_question),
        )

    def renormalize(self, content: NormalizedCardContent) -> NormalizedCardContent:
        """Run already-normalized content through the normalizer again."""
        raw = RawGenerationResult.model_validate(content.model_dump())
        return self.normalize(raw)
