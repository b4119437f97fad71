from typing import Optional, Tuple

from PySide6.QtCore import Qt, QPointF, QRectF, Signal
from PySide6.QtGui import QPainter, QPen, QColor, QResizeEvent
from PySide6.QtWidgets import QWidget, QLabel, QSizePolicy


# ---------- Aspect-ratio container ----------
class AspectRatioContainer(QWidget):
    """
    Keeps a single child (the display label) at a fixed aspect ratio, centered
    within the available space, so label pixels map linearly onto the canvas.
    """
    def __init__(self, aspect_ratio: float, child: QLabel, parent=None):
        super().__init__(parent)
        self.aspect_ratio = float(aspect_ratio)
        self.child = child
        child.setParent(self)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    def set_aspect_ratio(self, ar: float) -> None:
        self.aspect_ratio = float(ar)
        self.resizeEvent(QResizeEvent(self.size(), self.size()))

    def resizeEvent(self, event):
        W = max(1, self.width())
        H = max(1, self.height())
        ar = self.aspect_ratio

        if W / H >= ar:
            # Width too large: height saturates
            target_h = H
            target_w = int(round(H * ar))
        else:
            # Height too large: width saturates
            target_w = W
            target_h = int(round(W / ar))

        self.child.setGeometry((W - target_w) // 2, (H - target_h) // 2, target_w, target_h)


# ---------- Display with selection overlay ----------
class FrameDisplay(QLabel):
    """
    Shows the latest frame scaled to the label and draws the drag-selection box.
    Mouse positions are reported in canvas (render) pixels.
    """
    pressed = Signal(float, float)
    released = Signal(float, float)

    def __init__(self, canvas_w: int, canvas_h: int, parent=None):
        super().__init__(parent)
        self.canvas_w = canvas_w
        self.canvas_h = canvas_h
        self._selection: Optional[Tuple[float, float, float, float]] = None
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setScaledContents(True)
        self.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Ignored)
        self.setStyleSheet("background: black;")

    def set_canvas_size(self, w: int, h: int) -> None:
        self.canvas_w, self.canvas_h = int(w), int(h)

    def set_selection(self, rect: Optional[Tuple[float, float, float, float]]) -> None:
        self._selection = rect
        self.update()

    def _to_canvas(self, pos: QPointF) -> Tuple[float, float]:
        sx = self.canvas_w / max(1, self.width())
        sy = self.canvas_h / max(1, self.height())
        return pos.x() * sx, pos.y() * sy

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.pressed.emit(*self._to_canvas(event.position()))

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.released.emit(*self._to_canvas(event.position()))

    def paintEvent(self, event):
        super().paintEvent(event)
        if self._selection is None:
            return
        x, y, w, h = self._selection
        kx = self.width() / max(1, self.canvas_w)
        ky = self.height() / max(1, self.canvas_h)
        painter = QPainter(self)
        painter.setPen(QPen(QColor("white"), 2))
        painter.drawRect(QRectF(x * kx, y * ky, w * kx, h * ky))
        painter.end()
