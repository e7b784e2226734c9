from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Element(BaseModel):
    """One rendered page element considered as a hotspot candidate."""
    model_config = ConfigDict(allow_inf_nan=False)

    tag: str
    text: str = ""
    x: float = Field(ge=0)
    y: float = Field(ge=0)
    width: float = Field(ge=0)
    height: float = Field(ge=0)
    className: str = ""  # Free-form, only used for pattern matching
    id: str = ""
    zIndex: int = 0
    fontSize: float = 16.0
    fontWeight: Union[float, str] = "normal"  # Numeric weight or "bold"/"normal"

    @property
    def center(self):
        return self.x + self.width / 2, self.y + self.height / 2


class Viewport(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    width: float = Field(gt=0)
    height: float = Field(gt=0)


class Hotspot(BaseModel):
    """A scored region. x/y are the CENTER of the source box, not its top-left."""
    x: float
    y: float
    width: float
    height: float
    confidence: float = Field(ge=0.0, le=1.0)

    @classmethod
    def from_element(cls, element: Element, confidence: float) -> "Hotspot":
        center_x, center_y = element.center
        return cls(
            x=center_x,
            y=center_y,
            width=element.width,
            height=element.height,
            confidence=confidence,
        )

    def box(self) -> List[float]:
        """[left, top, right, bottom] of the hotspot region."""
        half_w = self.width / 2
        half_h = self.height / 2
        return [self.x - half_w, self.y - half_h, self.x + half_w, self.y + half_h]


class PredictionMeta(BaseModel):
    engine: str  # "inference" or "heuristic"
    model: Optional[str] = None
    fallback: bool = False
    fallback_reason: Optional[str] = None
    requested: int = 0
    accepted: int = 0
    pruned: int = 0
    prompt_hash: Optional[str] = None
    duration_ms: float = 0.0


class Prediction(BaseModel):
    hotspots: List[Hotspot] = []
    meta: PredictionMeta


# Viewport presets for the devices the capture layer renders at
DEVICE_VIEWPORTS: Dict[str, Viewport] = {
    'desktop': Viewport(width=1920, height=1080),
    'tablet': Viewport(width=1024, height=768),
    'mobile': Viewport(width=414, height=896),
}
