from dataclasses import dataclass
import numpy as np
from typing import Optional

@dataclass(frozen=True)
class FrameEvent:
    data: np.ndarray    # (height, width, 3) uint8 RGB
    width: int
    height: int
    seq: int            # render sequence number
    eval_ms: float
    render_ms: float

@dataclass(frozen=True)
class LogEvent:
    message: str
    level: Optional[str]
