"""Card news content generation.

Components, leaves first:
- orchestrator.py : ContentGenerationOrchestrator (provider chain + extractive fallback)
- normalizer.py   : FieldNormalizer (per-field contracts)
- facts.py        : FactExtractionChain (AI facts, pattern extraction)
- images.py       : ImageAllocator (generation + pool-fill)
- deck.py         : DeckAssembler (7-card canonical deck, 5/9 variants)
- pipeline.py     : CardNewsPipeline (all of the above)
"""

from .deck import DeckAssembler, parse_before_after
from .facts import FactExtractionChain
from .images import PLACEHOLDER_IMAGE, ImageAllocator, pool_fill
from .models import (
    ArticleRecord,
    BeforeAfter,
    CardDeck,
    CardRecord,
    CardType,
    DeckResult,
    FactEntry,
    FactSelection,
    GenerationOptions,
    ImageSlotAssignment,
    NormalizedCardContent,
    RawGenerationResult,
)
from .normalizer import FieldNormalizer
from .orchestrator import (
    ContentGenerationOrchestrator,
    ExtractiveFallbackStrategy,
    GenerationOutcome,
    ProviderStrategy,
)
from .pipeline import CardNewsPipeline

__all__ = [
    "ArticleRecord",
    "BeforeAfter",
    "CardDeck",
    "CardNewsPipeline",
    "CardRecord",
    "CardType",
    "ContentGenerationOrchestrator",
    "DeckAssembler",
    "DeckResult",
    "ExtractiveFallbackStrategy",
    "FactEntry",
    "FactExtractionChain",
    "FactSelection",
    "FieldNormalizer",
    "GenerationOptions",
    "GenerationOutcome",
    "ImageAllocator",
    "ImageSlotAssignment",
    "NormalizedCardContent",
    "PLACEHOLDER_IMAGE",
    "ProviderStrategy",
    "RawGenerationResult",
    "parse_before_after",
    "pool_fill",
]
