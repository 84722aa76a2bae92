"""Image slot allocation for the seven canonical cards.

Slots start from the article's own images. When an image credential is usable,
each slot still lacking a real image gets one generated image, requested one
at a time. Pool-fill always runs last so that no slot is ever empty.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence
from urllib.parse import quote

from ..constants import IMAGE_PROMPT_MAX_LENGTH, IMAGE_REQUEST_DELAY_SECONDS, IMAGE_SLOT_COUNT
from ..providers import ImageGenerationFailure, ImageProvider
from .models import ArticleRecord, ImageSlotAssignment, ImageSource, NormalizedCardContent

_logger = logging.getLogger("cardnews")

_PLACEHOLDER_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="1080" height="1350">'
    '<defs><linearGradient id="g" x1="0%" y1="0%" x2="100%" y2="100%">'
    '<stop offset="0%" style="stop-color:#e2e8f0"/>'
    '<stop offset="100%" style="stop-color:#cbd5e1"/>'
    "</linearGradient></defs>"
    '<rect width="100%" height="100%" fill="url(#g)"/></svg>'
)
PLACEHOLDER_IMAGE = "data:image/svg+xml," + quote(_PLACEHOLDER_SVG, safe="")
"""Static placeholder used only when no real image exists anywhere."""


def is_real_image(ref: str | None) -> bool:
    """A non-blank reference that is not inline ``data:`` content."""
    ref = (ref or "").strip()
    return bool(ref) and not ref.startswith("data:")


def _cap(text: str, length: int) -> str:
    return (text or "")[:length]


def build_slot_prompts(content: NormalizedCardContent, article: ArticleRecord | None = None) -> list[str]:
    """One image prompt per slot, derived from that slot's card text."""
    headline = content.headline.replace("\n", " ") or (article.title if article else "")
    prompts = [
        f"Professional news headline photo, photojournalism: {_cap(headline, 80)}. "
        "Editorial, high quality, realistic, no text overlay.",
        f"Editorial portrait or speaking moment, news style: {_cap(content.quote, 60)} "
        f"{_cap(content.quote_speaker, 30)}. Atmospheric, realistic, no text.",
        f"News context scene, documentary style: {_cap(content.quote_context, 80)}. "
        "Realistic, editorial, no text overlay.",
        f"News problem or issue scene, editorial style: {_cap(content.card4_key_sentence, 60)}. "
        "Realistic, documentary, no text overlay.",
        f"Why it matters, impact scene, news documentary: {_cap(content.why_important, 100)}. "
        "Realistic, editorial, no text.",
        f"Debate or two sides, editorial news style: {_cap(content.pros_cons.pros, 40)} versus "
        f"{_cap(content.pros_cons.cons, 40)}. Symbolic or scene, no text overlay.",
        f"Premium newspaper closing, reader engagement: {_cap(content.reader_question, 60)}. "
        "Trustworthy, professional news brand atmosphere, no text overlay.",
    ]
    return [prompt[:IMAGE_PROMPT_MAX_LENGTH] for prompt in prompts]


def pool_fill(
    images: Sequence[str],
    sources: Sequence[ImageSource] | None = None,
) -> ImageSlotAssignment:
    """Fill every slot lacking a real image from the pool of real images.

    With an empty pool, empty slots receive the placeholder; inline ``data:``
    images are kept as they are.
    """
    slots = [(ref or "").strip() for ref in list(images)[:IMAGE_SLOT_COUNT]]
    slots += [""] * (IMAGE_SLOT_COUNT - len(slots))
    slot_sources: list[ImageSource] = list(sources or [])[:IMAGE_SLOT_COUNT]
    slot_sources += ["article"] * (IMAGE_SLOT_COUNT - len(slot_sources))

    pool = [ref for ref in slots if is_real_image(ref)]
    for index, ref in enumerate(slots):
        if is_real_image(ref):
            continue
        if pool:
            slots[index] = pool[index % len(pool)]
            slot_sources[index] = "pool"
        elif ref:
            slot_sources[index] = "inline"
        else:
            slots[index] = PLACEHOLDER_IMAGE
            slot_sources[index] = "placeholder"

    return ImageSlotAssignment(images=slots, sources=slot_sources)


class ImageAllocator:
    """Assign exactly seven image references to the seven card slots.

    Usage:
        allocator = ImageAllocator(ImageProvider(config.image_provider))
        assignment = await allocator.allocate(article.image_urls, content, article)
    """

    def __init__(
        self,
        provider: ImageProvider | None = None,
        request_delay: float = IMAGE_REQUEST_DELAY_SECONDS,
    ):
        self.provider = provider
        self.request_delay = request_delay

    @property
    def can_generate(self) -> bool:
        return self.provider is not None and self.provider.is_available

    @staticmethod
    def needed_slots(images: Sequence[str]) -> list[int]:
        """Indices of slots without a real image."""
        slots = list(images)[:IMAGE_SLOT_COUNT]
        slots += [""] * (IMAGE_SLOT_COUNT - len(slots))
        return [index for index, ref in enumerate(slots) if not is_real_image(ref)]

    async def allocate(
        self,
        candidates: Sequence[str],
        content: NormalizedCardContent,
        article: ArticleRecord | None = None,
        generate: bool = True,
    ) -> ImageSlotAssignment:
        """Generate images for missing slots (when possible), then pool-fill."""
        slots = [(ref or "").strip() for ref in list(candidates)[:IMAGE_SLOT_COUNT]]
        slots += [""] * (IMAGE_SLOT_COUNT - len(slots))
        sources: list[ImageSource] = ["article"] * IMAGE_SLOT_COUNT

        needed = self.needed_slots(slots)
        if not generate:
            _logger.info("Image generation disabled, filling from article images")
        elif not self.can_generate:
            _logger.warning("Image credential missing or invalid, skipping generation")
        elif needed:
            await self._generate_missing(slots, sources, needed, content, article)

        assignment = pool_fill(slots, sources)
        _logger.info(
            f"Images allocated | sources:{','.join(assignment.sources)} | "
            f"placeholders:{assignment.placeholder_count}"
        )
        return assignment

    async def _generate_missing(
        self,
        slots: list[str],
        sources: list[ImageSource],
        needed: list[int],
        content: NormalizedCardContent,
        article: ArticleRecord | None,
    ) -> None:
        if self.provider is None:
            return
        prompts = build_slot_prompts(content, article)
        _logger.info(f"Generating images for slots {[i + 1 for i in needed]}")

        for position, index in enumerate(needed):
            if position > 0 and self.request_delay > 0:
                await asyncio.sleep(self.request_delay)
            try:
                url = await self.provider.generate(prompts[index], slot=index + 1)
            except ImageGenerationFailure as e:
                _logger.warning(f"Image slot {index + 1} failed, leaving for pool-fill: {e}")
                continue
            slots[index] = url
            sources[index] = "generated"
