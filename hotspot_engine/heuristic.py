"""
Offline, deterministic hotspot scoring.

Each element accumulates independent additive bonuses for position, size,
tag semantics and typography, then gets clamped to [0, 1].
"""

import logging
from typing import List, Tuple, Union

from . import config
from .errors import ScoringOutcome
from .models import Element, Hotspot, Viewport

logger = logging.getLogger(__name__)

HEADLINE_TAGS = {'h1'}
BUTTON_TAGS = {'button'}
LOGO_TAGS = {'img', 'svg'}
HERO_TAGS = {'img', 'video'}


def parse_font_weight(font_weight: Union[float, str, None]) -> float:
    """Numeric weight for a CSS font-weight value ("bold" counts as 700)."""
    if isinstance(font_weight, (int, float)):
        return float(font_weight)
    value = (font_weight or '').strip().lower()
    if value == 'bold':
        return 700.0
    try:
        return float(value)
    except ValueError:
        return 400.0


def score_element(element: Element, viewport: Viewport) -> Tuple[float, str]:
    """
    Score a single element by attention likelihood.

    Args:
        element: Element descriptor in viewport coordinates
        viewport: Visible frame used for above-the-fold weighting

    Returns:
        (confidence in [0, 1], element type) where the type is one of
        headline, cta, logo, hero or other
    """
    # Zero-area boxes have nothing to look at
    if element.width <= 0 or element.height <= 0:
        return 0.0, 'other'

    score = 0.0
    element_type = 'other'
    tag = element.tag.lower()
    classes = element.className.lower()

    if element.y < viewport.height / 3:
        score += config.FOLD_TOP_THIRD_BONUS
    elif element.y < viewport.height:
        score += config.FOLD_VISIBLE_BONUS

    center_x, _ = element.center
    if abs(center_x - viewport.width / 2) < config.CENTER_BIAS_RADIUS_PX:
        score += config.CENTER_BIAS_BONUS

    if element.width * element.height > config.LARGE_AREA_PX2:
        score += config.LARGE_AREA_BONUS

    # Later rules overwrite the type label of earlier ones
    if tag in HEADLINE_TAGS:
        score += config.HEADLINE_BONUS
        element_type = 'headline'

    if tag in BUTTON_TAGS or any(marker in classes for marker in config.CTA_CLASS_MARKERS):
        score += config.CTA_BONUS
        element_type = 'cta'

    if tag in LOGO_TAGS and any(marker in classes for marker in config.LOGO_CLASS_MARKERS):
        score += config.LOGO_BONUS
        element_type = 'logo'

    if (tag in HERO_TAGS and element.width > config.HERO_MIN_WIDTH
            and element.height > config.HERO_MIN_HEIGHT
            and element.y < viewport.height * config.HERO_MAX_Y_RATIO):
        score += config.HERO_BONUS
        element_type = 'hero'

    if parse_font_weight(element.fontWeight) >= config.BOLD_MIN_WEIGHT:
        score += config.BOLD_BONUS
    if element.fontSize > config.LARGE_FONT_PX:
        score += config.LARGE_FONT_BONUS

    return min(max(score, 0.0), 1.0), element_type


class HeuristicScorer:
    """Always-available scorer. Does not run overlap suppression."""

    name = 'heuristic'

    def __init__(self, max_hotspots: int = config.MAX_HOTSPOTS,
                 min_confidence: float = config.MIN_CONFIDENCE):
        self.max_hotspots = max_hotspots
        self.min_confidence = min_confidence

    def _candidates(self, elements: List[Element], viewport: Viewport) -> List[Tuple[float, Element]]:
        scored = []
        for element in elements:
            if element.y >= viewport.height:
                continue
            confidence, _ = score_element(element, viewport)
            if confidence <= self.min_confidence:
                continue
            scored.append((confidence, element))

        # sorted() is stable, so equal scores keep input order
        return sorted(scored, key=lambda item: item[0], reverse=True)

    def score(self, elements: List[Element], viewport: Viewport) -> ScoringOutcome:
        """Top hotspots by confidence, highest first."""
        scored = self._candidates(elements, viewport)
        hotspots = [Hotspot.from_element(element, confidence)
                    for confidence, element in scored[:self.max_hotspots]]
        logger.debug("Heuristic scorer kept %d of %d elements", len(hotspots), len(elements))
        return ScoringOutcome(strategy=self.name, hotspots=hotspots, requested=len(scored))
