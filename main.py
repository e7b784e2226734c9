import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from hotspot_engine import (
    DEVICE_VIEWPORTS,
    Element,
    Hotspot,
    PredictionMeta,
    Viewport,
    get_settings,
    hotspots_to_points,
    predict_with_meta,
)

logging.basicConfig(
    level=getattr(logging, get_settings().log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("hotspot_service")

app = FastAPI()

origins = [
    "http://localhost:8000",
    "http://localhost",
    "http://127.0.0.1",
    "http://127.0.0.1:8000",
    "*",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HotspotRequest(BaseModel):
    elements: List[Element] = []
    viewport: Optional[Viewport] = None
    device: Optional[str] = None  # "desktop", "tablet" or "mobile" when no viewport is given


class PointsRequest(HotspotRequest):
    density_per_mp: float = Field(default=800, gt=0, allow_inf_nan=False)
    seed: Optional[int] = None


class HotspotResponse(BaseModel):
    message: str
    hotspots: List[Hotspot] = []
    meta: PredictionMeta


class PointsResponse(BaseModel):
    hotspots: List[Hotspot] = []
    points: List[Dict[str, float]] = []


def resolve_viewport(request: HotspotRequest) -> Viewport:
    """Explicit viewport wins over a device preset."""
    if request.viewport is not None:
        return request.viewport
    if request.device is None:
        raise HTTPException(status_code=400, detail="Either viewport or device is required")
    viewport = DEVICE_VIEWPORTS.get(request.device.lower())
    if viewport is None:
        raise HTTPException(status_code=400, detail=f"Unknown device: {request.device}")
    return viewport


@app.get("/health")
def health_check():
    return {"status": "ok", "inference_configured": get_settings().has_credential}


@app.post("/hotspots", response_model=HotspotResponse)
def detect_hotspots(request: HotspotRequest):
    """
    Rank the supplied page elements by predicted visual attention.
    Returns at most eight deduplicated hotspots plus which scorer produced them.
    """
    viewport = resolve_viewport(request)
    prediction = predict_with_meta(request.elements, viewport)

    if prediction.hotspots:
        message = f"Predicted {len(prediction.hotspots)} hotspots."
    else:
        message = "No confident hotspot found."
    return HotspotResponse(message=message, hotspots=prediction.hotspots, meta=prediction.meta)


@app.post("/hotspots/points", response_model=PointsResponse)
def hotspot_points(request: PointsRequest):
    """Predict hotspots and expand them into weighted points for heat rendering."""
    viewport = resolve_viewport(request)
    prediction = predict_with_meta(request.elements, viewport)
    points = hotspots_to_points(prediction.hotspots, viewport,
                                density_per_mp=request.density_per_mp, seed=request.seed)

    logger.info("Generated %d points from %d hotspots", len(points), len(prediction.hotspots))
    return PointsResponse(hotspots=prediction.hotspots, points=points)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
