import numpy as np
from PySide6.QtGui import QImage


def ndarray_to_qimage(rgb: np.ndarray) -> QImage:
    """
    Wraps an (H, W, 3) uint8 RGB buffer in a QImage. The QImage borrows the
    buffer, so callers must copy() it before the array goes away.
    """
    if not rgb.flags["C_CONTIGUOUS"]:
        rgb = np.ascontiguousarray(rgb)
    h, w, _ = rgb.shape
    return QImage(rgb.data, w, h, 3 * w, QImage.Format.Format_RGB888)
