"""Grammatical suffix tables used by the normalizer and fact validator.

The rules are Korean-specific. A table for another language can be built with
the same shape and passed to ``FieldNormalizer`` / ``FactExtractionChain``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class SuffixRule:
    """A trailing pattern and the text that replaces it."""

    pattern: re.Pattern[str]
    replacement: str = ""

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text, count=1).strip()


def _rule(pattern: str, replacement: str = "") -> SuffixRule:
    return SuffixRule(re.compile(pattern), replacement)


@dataclass(frozen=True)
class SuffixTable:
    """All language-specific patterns in one place."""

    # Incomplete particles/endings stripped from headline lines, in order
    headline_trims: tuple[SuffixRule, ...]
    # A headline line must not end on one of these
    headline_bad_end: re.Pattern[str]
    # Reporter attribution phrases removed from quotes
    attributions: tuple[SuffixRule, ...]
    # Dangling particles stripped from the end of quotes
    quote_trailing: re.Pattern[str]
    # Marks a full sentence (facts ending this way are rejected)
    sentence_final: re.Pattern[str]

    def trim_headline_once(self, text: str) -> str:
        for rule in self.headline_trims:
            text = rule.apply(text)
        return text

    def has_bad_headline_end(self, text: str) -> bool:
        return bool(self.headline_bad_end.search(text))

    def ends_sentence(self, text: str) -> bool:
        return bool(self.sentence_final.search(text.strip()))


KOREAN_SUFFIXES = SuffixTable(
    headline_trims=(
        _rule(r"[를한]$"),
        _rule(r"(?:만든|받을|의로|된지|하는|찾을|볼수|위한|대한|통한)$"),
        _rule(r"(?:하는|되는|이는|가는|오는|보는|위한|대한)$"),
        _rule(r"(?:으로|에서|부터|에게|에도|처럼|마저|조차)$"),
        _rule(r"[를와과에의도만큼]$"),
        _rule(r"(?:하데|지만|면서|이라도|이나마)$"),
        _rule(r"(?:이다|였다|다\.?|했다\.?)$"),
        _rule(r"(?:됐다|했다|있다|없다)\.?$"),
        _rule(r"[법적물성]$"),
        _rule(r"(?:이런|그런|저런|어떤)\s*$"),
    ),
    headline_bad_end=re.compile(r"[를한만든받을의로된에서와과도큼]$"),
    attributions=(
        _rule(r"[\"”’']?\s*(?:이?라고|고)\s*(?:밝혔다|말했다|전했다|밝혔습니다|말했습니다|강조했다|설명했다|덧붙였다|주장했다)\.?"),
        _rule(r"(?:으로|로)\s*(?:나타났다|드러났다|알려졌다|전해졌다|보도됐다)\.?"),
        _rule(r"것으로\s*(?:보인다|예상된다|관측된다)\.?"),
    ),
    quote_trailing=re.compile(r"(?:로|을|를|의|는|에|과|와)\s*$"),
    sentence_final=re.compile(r"(?:다|요|죠|니다|니까|습니까)\s*[.!?]?$|[.!?]$"),
)
