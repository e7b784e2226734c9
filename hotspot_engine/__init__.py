"""Hotspot prediction from rendered page elements."""

from .config import EngineSettings, get_settings, set_settings
from .errors import HotspotEngineError, InferenceError, ScoringOutcome
from .heuristic import HeuristicScorer, score_element
from .inference import InferenceScorer
from .models import DEVICE_VIEWPORTS, Element, Hotspot, Prediction, PredictionMeta, Viewport
from .points import hotspots_to_points
from .selector import predict, predict_with_meta
from .suppression import iou, suppress_overlaps

__all__ = [
    "DEVICE_VIEWPORTS",
    "Element",
    "EngineSettings",
    "HeuristicScorer",
    "Hotspot",
    "HotspotEngineError",
    "InferenceError",
    "InferenceScorer",
    "Prediction",
    "PredictionMeta",
    "ScoringOutcome",
    "Viewport",
    "get_settings",
    "hotspots_to_points",
    "iou",
    "predict",
    "predict_with_meta",
    "score_element",
    "set_settings",
    "suppress_overlaps",
]
