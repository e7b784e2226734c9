import math
from typing import Dict, List, Optional

import numpy as np

from .models import Hotspot, Viewport

MIN_POINTS_PER_HOTSPOT = 20
MAX_POINTS_PER_HOTSPOT = 2000
CENTER_WEIGHT_FALLOFF = 0.3


def hotspots_to_points(hotspots: List[Hotspot], viewport: Viewport,
                       density_per_mp: float = 800,
                       seed: Optional[int] = None) -> List[Dict[str, float]]:
    """
    Expand hotspots into weighted sample points for heat rendering.

    Points sit on a jittered grid inside each hotspot box; weight falls off by
    up to 30% from the box center and scales with the hotspot confidence.

    Args:
        hotspots: Hotspots with center-based coordinates
        viewport: Points outside this frame are dropped
        density_per_mp: Points per million pixels of hotspot area
        seed: Seed for the jitter, for reproducible output

    Returns:
        List of {"x", "y", "weight"} dicts in pixel coordinates
    """
    rng = np.random.default_rng(seed)
    points: List[Dict[str, float]] = []

    for hotspot in hotspots:
        left, top, right, bottom = hotspot.box()
        width, height = right - left, bottom - top
        if width <= 0 or height <= 0:
            continue

        count = int(np.clip(math.floor(width * height / (1e6 / density_per_mp)),
                            MIN_POINTS_PER_HOTSPOT, MAX_POINTS_PER_HOTSPOT))
        cols = math.ceil(math.sqrt(count * width / height))
        rows = math.ceil(count / cols)

        idx = np.arange(count)
        base_x = left + (idx % cols + 0.5) * (width / cols)
        base_y = top + (idx // cols + 0.5) * (height / rows)
        jitter = rng.uniform(-1.0, 1.0, size=(2, count))

        xs = np.round(np.clip(base_x + jitter[0], left, right - 1))
        ys = np.round(np.clip(base_y + jitter[1], top, bottom - 1))

        inside = (xs >= 0) & (xs < viewport.width) & (ys >= 0) & (ys < viewport.height)
        dist = np.sqrt((xs - hotspot.x) ** 2 + (ys - hotspot.y) ** 2)
        max_dist = math.sqrt((width / 2) ** 2 + (height / 2) ** 2)
        weights = hotspot.confidence * (1 - (dist / max_dist) * CENTER_WEIGHT_FALLOFF)

        for x, y, w in zip(xs[inside], ys[inside], weights[inside]):
            points.append({'x': float(x), 'y': float(y), 'weight': float(w)})

    return points
