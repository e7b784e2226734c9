"""
Inference-backed hotspot scoring.

Sends a compact table of candidate elements to an OpenAI-compatible chat
completion endpoint and asks for a ranked ``{"hotspots": [{index, confidence}]}``
object. The response is untrusted: it is structurally validated before any of
it is turned into hotspots, and every failure is reported as an
``InferenceError`` on the returned ``ScoringOutcome``.
"""

from __future__ import annotations

import hashlib
import json
import logging
import math
import re
from functools import lru_cache
from typing import Any, List, Optional, Tuple

import openai
from openai import OpenAI

from . import config
from .config import EngineSettings
from .errors import InferenceError, ScoringOutcome
from .models import Element, Hotspot, Viewport
from .suppression import suppress_overlaps

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an expert in web design and eye-tracking patterns. Return only valid JSON."

_WHITESPACE_RE = re.compile(r"\s+")


def candidate_elements(elements: List[Element], viewport: Viewport) -> List[Element]:
    """Elements starting within the first viewport-and-a-half."""
    limit = viewport.height * config.INFERENCE_FOLD_RATIO
    return [el for el in elements if el.y < limit]


def text_excerpt(text: str, limit: int = config.TEXT_EXCERPT_CHARS) -> str:
    collapsed = _WHITESPACE_RE.sub(" ", text or "").strip()
    return collapsed[:limit]


def _fmt(value: float) -> str:
    return f"{value:g}"


def build_element_table(candidates: List[Element]) -> str:
    """One CSV-like row per candidate: index,x,y,width,height,tag,"text"."""
    rows = ["index,x,y,width,height,tag,text"]
    for index, el in enumerate(candidates):
        excerpt = text_excerpt(el.text).replace('"', "'")
        rows.append(
            f'{index},{_fmt(el.x)},{_fmt(el.y)},{_fmt(el.width)},{_fmt(el.height)},{el.tag},"{excerpt}"'
        )
    return "\n".join(rows)


def build_prompt(candidates: List[Element], viewport: Viewport) -> str:
    table = build_element_table(candidates)
    return (
        "Predict where a visitor's eyes land first on this landing page.\n"
        f"Viewport: {_fmt(viewport.width)}x{_fmt(viewport.height)} px. "
        f"The fold is at y={_fmt(viewport.height)}.\n"
        "Elements (index refers to this table):\n"
        f"{table}\n\n"
        "Return ONLY a JSON object with a single key \"hotspots\" holding an array of up to "
        f"{config.MAX_HOTSPOTS} objects {{\"index\": <int>, \"confidence\": <number 0-1>}}, "
        "most eye-catching first. Favour the main headline, primary call-to-action buttons, "
        "prices and primary product imagery."
    )


def prompt_hash(prompt: str) -> str:
    return hashlib.sha256(prompt.encode("utf-8")).hexdigest()[:16]


def parse_ranking(content: Optional[str], candidate_count: int) -> Tuple[List[Tuple[int, float]], int]:
    """
    Validate a raw response body into (index, confidence) pairs.

    Args:
        content: Message text returned by the service
        candidate_count: Number of rows sent, used to bound-check indices

    Returns:
        (valid pairs in service order, number of entries the service returned)

    Raises:
        InferenceError: body is not JSON, not an object, or ``hotspots`` is
            missing or not an array
    """
    if not content:
        raise InferenceError(InferenceError.MALFORMED_RESPONSE, "empty response body")
    try:
        payload: Any = json.loads(content)
    except (ValueError, TypeError, RecursionError) as exc:
        raise InferenceError(InferenceError.MALFORMED_RESPONSE, f"response is not JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise InferenceError(InferenceError.MALFORMED_RESPONSE, "response is not a JSON object")
    entries = payload.get("hotspots")
    if not isinstance(entries, list):
        raise InferenceError(InferenceError.MALFORMED_RESPONSE, "'hotspots' is missing or not an array")

    ranking = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.debug("Dropping non-object hotspot entry %r", entry)
            continue
        index = entry.get("index")
        confidence = entry.get("confidence")
        # bool is an int subclass
        if isinstance(index, bool) or not isinstance(index, int):
            logger.debug("Dropping entry with non-integer index %r", index)
            continue
        if not 0 <= index < candidate_count:
            logger.debug("Dropping out-of-range index %d (have %d candidates)", index, candidate_count)
            continue
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)) or not math.isfinite(confidence):
            logger.debug("Dropping entry %d with non-numeric confidence %r", index, confidence)
            continue
        ranking.append((index, min(max(float(confidence), 0.0), 1.0)))

    return ranking, len(entries)


@lru_cache(maxsize=8)
def shared_client(api_key: str, base_url: Optional[str], timeout: float) -> OpenAI:
    """One OpenAI client per credential so connections are pooled across requests."""
    return OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)


class InferenceScorer:
    """Ranks candidates through an external chat-completion service."""

    name = 'inference'

    def __init__(self, settings: EngineSettings, client: Optional[OpenAI] = None):
        self.settings = settings
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = shared_client(self.settings.api_key, self.settings.base_url, self.settings.timeout)
        return self._client

    def _complete(self, prompt: str) -> Optional[str]:
        try:
            response = self.client.chat.completions.create(
                model=self.settings.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
                response_format={"type": "json_object"},
            )
        except openai.APITimeoutError as exc:
            raise InferenceError(InferenceError.TIMEOUT, f"inference timed out: {exc}") from exc
        except Exception as exc:
            raise InferenceError(InferenceError.SERVICE_ERROR, f"inference request failed: {exc}") from exc

        try:
            return response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as exc:
            raise InferenceError(InferenceError.MALFORMED_RESPONSE, "response has no message content") from exc

    def score(self, elements: List[Element], viewport: Viewport) -> ScoringOutcome:
        if not self.settings.has_credential:
            return ScoringOutcome.failure(
                self.name, InferenceError(InferenceError.NOT_CONFIGURED, "no inference credential configured"))

        candidates = candidate_elements(elements, viewport)
        prompt = build_prompt(candidates, viewport)
        digest = prompt_hash(prompt)

        try:
            content = self._complete(prompt)
            ranking, requested = parse_ranking(content, len(candidates))
            ranked = [Hotspot.from_element(candidates[index], confidence) for index, confidence in ranking]
            hotspots = suppress_overlaps(ranked)[:config.MAX_HOTSPOTS]
        except InferenceError as exc:
            return ScoringOutcome.failure(self.name, exc, prompt_hash=digest)
        except Exception as exc:
            error = InferenceError(InferenceError.SERVICE_ERROR, f"unexpected inference failure: {exc!r}")
            return ScoringOutcome.failure(self.name, error, prompt_hash=digest)
        return ScoringOutcome(strategy=self.name, hotspots=hotspots, requested=requested, prompt_hash=digest)
