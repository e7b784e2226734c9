"""
Strategy selection for hotspot prediction.

Inference runs only when a credential is configured; any failure it reports
is logged and replaced by the heuristic result, so callers always get a list.
"""

import logging
import time
from typing import List, Optional

from openai import OpenAI

from .config import EngineSettings, get_settings
from .errors import ScoringOutcome
from .heuristic import HeuristicScorer
from .inference import InferenceScorer
from .models import Element, Hotspot, Prediction, PredictionMeta, Viewport

logger = logging.getLogger(__name__)


def predict_with_meta(elements: List[Element], viewport: Viewport,
                      settings: Optional[EngineSettings] = None,
                      client: Optional[OpenAI] = None) -> Prediction:
    """Predict hotspots and report which strategy produced them."""
    settings = settings or get_settings()
    start = time.perf_counter()
    heuristic = HeuristicScorer()

    inference_outcome: Optional[ScoringOutcome] = None
    if settings.has_credential:
        inference_outcome = InferenceScorer(settings, client=client).score(elements, viewport)
    else:
        logger.info("No inference credential configured, using heuristic scorer")

    if inference_outcome is not None and inference_outcome.ok:
        outcome = inference_outcome
    else:
        if inference_outcome is not None:
            logger.warning("Inference scorer failed (%s), falling back to heuristic scorer",
                           inference_outcome.error)
        outcome = heuristic.score(elements, viewport)

    duration_ms = (time.perf_counter() - start) * 1000
    fallback = inference_outcome is not None and not inference_outcome.ok
    meta = PredictionMeta(
        engine=outcome.strategy,
        model=settings.model if inference_outcome is not None else None,
        fallback=fallback,
        fallback_reason=inference_outcome.error.kind if fallback else None,
        requested=outcome.requested,
        accepted=len(outcome.hotspots),
        pruned=max(outcome.requested - len(outcome.hotspots), 0),
        prompt_hash=inference_outcome.prompt_hash if inference_outcome is not None else None,
        duration_ms=round(duration_ms, 2),
    )
    logger.info("Predicted %d hotspots with %s scorer in %.1f ms",
                meta.accepted, meta.engine, duration_ms)
    return Prediction(hotspots=outcome.hotspots, meta=meta)


def predict(elements: List[Element], viewport: Viewport,
            settings: Optional[EngineSettings] = None,
            client: Optional[OpenAI] = None) -> List[Hotspot]:
    """
    Ranked, deduplicated hotspots for a page snapshot.

    Never raises for inference problems; an empty list means no confident
    hotspot was found.
    """
    return predict_with_meta(elements, viewport, settings=settings, client=client).hotspots
