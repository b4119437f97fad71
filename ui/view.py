from datetime import datetime

from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPixmap, QTextCursor
from PySide6.QtWidgets import (
    QMainWindow, QVBoxLayout, QHBoxLayout, QWidget, QPushButton, QComboBox,
    QFileDialog, QDockWidget, QFormLayout, QLineEdit, QCheckBox,
    QPlainTextEdit
)

from adapters.qt_render_bridge import QtRenderBridge
from coloring.palettes import palettes
from fractals.complex_number import ComplexNumber
from fractals.validation import ParameterError
from ui.session import (SessionState, InputEvent, KeyPress, MouseDown, MouseUp,
                        SetParameters, Resize, Reset, reduce)
from ui.view_components import AspectRatioContainer, FrameDisplay
from utils.enums import FractalMode


CANVAS_PRESETS = {
    "800x600": (800, 600),
    "1280x720": (1280, 720),
    "1024x1024": (1024, 1024),
    "640x480": (640, 480),
}

_KEY_NAMES = {
    Qt.Key.Key_Return: "Enter",
    Qt.Key.Key_Enter: "Enter",
    Qt.Key.Key_Backspace: "Backspace",
    Qt.Key.Key_Left: "ArrowLeft",
    Qt.Key.Key_Right: "ArrowRight",
    Qt.Key.Key_Up: "ArrowUp",
    Qt.Key.Key_Down: "ArrowDown",
}


# =============================================================================
# Main Window
# =============================================================================
class FractalViewer(QMainWindow):
    # ---------- Construction & UI wiring ----------
    def __init__(self, state: SessionState = None):
        super().__init__()
        self.setWindowTitle("Fractal Viewer")
        self.setGeometry(100, 100, 1400, 800)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        self.state = state or SessionState()
        self.view_image: QImage | None = None

        self.bridge = QtRenderBridge(parent=self)
        self.bridge.image_updated.connect(self.update_image)
        self.bridge.log_text.connect(self.log)

        self.display = FrameDisplay(self.state.canvas_width, self.state.canvas_height)
        self.display.setFocusPolicy(Qt.FocusPolicy.ClickFocus)
        self.display.pressed.connect(lambda x, y: self.dispatch(MouseDown(x, y)))
        self.display.released.connect(lambda x, y: self.dispatch(MouseUp(x, y)))
        self.display_container = AspectRatioContainer(
            self.state.canvas_width / self.state.canvas_height, self.display, parent=self)

        self._build_ui()
        self._update_fields()

    def _build_ui(self):
        # ----- Central layout -----
        layout = QVBoxLayout()
        layout.setContentsMargins(16, 8, 12, 8)
        layout.addWidget(self.display_container)

        controls = QHBoxLayout()
        rewind_button = QPushButton("Rewind")
        rewind_button.clicked.connect(lambda: self.dispatch(KeyPress("Backspace")))
        reset_button = QPushButton("Reset View")
        reset_button.clicked.connect(lambda: self.dispatch(Reset()))
        save_button = QPushButton("Save Image")
        save_button.clicked.connect(self.save_image)
        for w in (rewind_button, reset_button, save_button):
            w.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            controls.addWidget(w)
        layout.addLayout(controls)

        container = QWidget()
        container.setLayout(layout)
        self.setCentralWidget(container)

        # ----- Side dock: Controls -----
        self.side_menu = QDockWidget("Controls", self)
        self.side_menu.setAllowedAreas(Qt.DockWidgetArea.RightDockWidgetArea)
        self.side_menu.setFeatures(QDockWidget.DockWidgetFeature.NoDockWidgetFeatures)
        form_widget = QWidget()
        form = QFormLayout()

        self.mode_input = QComboBox()
        self.mode_input.addItems(["mandelbrot", "julia"])
        form.addRow("Mode: ", self.mode_input)

        self.julia_real_input = QLineEdit()
        self.julia_imag_input = QLineEdit()
        form.addRow("Julia C (real): ", self.julia_real_input)
        form.addRow("Julia C (imag): ", self.julia_imag_input)

        self.resolution_input = QLineEdit()
        self.accuracy_input = QLineEdit()
        form.addRow("Resolution: ", self.resolution_input)
        form.addRow("Accuracy: ", self.accuracy_input)

        self.palette_input = QComboBox()
        self.palette_input.addItems(palettes.keys())
        form.addRow("Palette: ", self.palette_input)

        self.canvas_input = QComboBox()
        self.canvas_input.addItems(CANVAS_PRESETS.keys())
        form.addRow("Canvas: ", self.canvas_input)

        self.start_x_input = QLineEdit()
        self.start_y_input = QLineEdit()
        self.view_width_input = QLineEdit()
        form.addRow("Start X: ", self.start_x_input)
        form.addRow("Start Y: ", self.start_y_input)
        form.addRow("View width: ", self.view_width_input)

        apply_btn = QPushButton("Apply")
        apply_btn.clicked.connect(self.apply_settings)
        form.addRow(apply_btn)

        form_widget.setLayout(form)
        self.side_menu.setWidget(form_widget)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self.side_menu)

        # ----- Log dock -----
        self.log_dock = QDockWidget("Log", self)
        self.log_dock.setAllowedAreas(Qt.DockWidgetArea.RightDockWidgetArea)
        self.log_dock.setFeatures(QDockWidget.DockWidgetFeature.NoDockWidgetFeatures)
        self.log_view = QPlainTextEdit(self)
        self.log_view.setReadOnly(True)
        self.log_view.setMaximumBlockCount(5000)
        self.log_view.setStyleSheet(
            "background: #0f0f10; color: #cfd2d6; font-family: Consolas, monospace; font-size: 11px;"
        )
        log_container = QWidget(self)
        log_v = QVBoxLayout(log_container)
        log_v.setContentsMargins(6, 6, 6, 6)
        log_controls = QHBoxLayout()
        btn_clear = QPushButton("Clear")
        btn_clear.clicked.connect(lambda: self.log_view.clear())
        self.log_autoscroll_chk = QCheckBox("Auto-scroll")
        self.log_autoscroll_chk.setChecked(True)
        log_controls.addWidget(btn_clear)
        log_controls.addStretch(1)
        log_controls.addWidget(self.log_autoscroll_chk)
        log_v.addLayout(log_controls)
        log_v.addWidget(self.log_view)
        self.log_dock.setWidget(log_container)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self.log_dock)
        self.splitDockWidget(self.side_menu, self.log_dock, Qt.Orientation.Vertical)

    # ---------- State transitions ----------
    def dispatch(self, event: InputEvent) -> None:
        try:
            new_state = reduce(self.state, event)
        except (ParameterError, KeyError) as e:
            self.log(f"Rejected {type(event).__name__}: {e}")
            return

        self.state = new_state
        self.display.set_selection(self.state.selection_rect)
        self._update_fields()
        if event.triggers_render:
            self.render_fractal()

    def apply_settings(self):
        try:
            mode = FractalMode.from_name(self.mode_input.currentText())
            julia = ComplexNumber(float(self.julia_real_input.text()),
                                  float(self.julia_imag_input.text()))
            event = SetParameters(
                resolution=int(self.resolution_input.text()),
                accuracy=int(self.accuracy_input.text()),
                mode=mode,
                julia_param=julia,
                palette=self.palette_input.currentText(),
                start_x=float(self.start_x_input.text()),
                start_y=float(self.start_y_input.text()),
                view_width=float(self.view_width_input.text()),
            )
        except ValueError as e:
            self.log(f"Error in inputs: {e}")
            return

        canvas_w, canvas_h = CANVAS_PRESETS[self.canvas_input.currentText()]
        if (canvas_w, canvas_h) != (self.state.canvas_width, self.state.canvas_height):
            self.display.set_canvas_size(canvas_w, canvas_h)
            self.display_container.set_aspect_ratio(canvas_w / canvas_h)
            self.state = reduce(self.state, Resize(canvas_w, canvas_h))
            self.log(f"Canvas set to {canvas_w}x{canvas_h}.")

        self.dispatch(event)

    def keyPressEvent(self, event):
        key = _KEY_NAMES.get(event.key(), event.text())
        if not key:
            super().keyPressEvent(event)
            return
        self.dispatch(KeyPress(key))

    # ---------- Rendering control ----------
    def render_fractal(self):
        s = self.state
        self.log(
            f"Render frame: canvas={s.canvas_width}x{s.canvas_height}, "
            f"start=({s.start_x:.6g},{s.start_y:.6g}), width={s.view_width:.6g}, "
            f"resolution={s.resolution}, accuracy={s.accuracy}, mode={s.mode.name.lower()}."
        )
        self.bridge.request(self.state)

    def update_image(self, image: QImage, render_w: int, render_h: int):
        self.view_image = image
        self.display.setPixmap(QPixmap.fromImage(image))

    # ---------- Utilities ----------
    def save_image(self):
        if self.view_image:
            path, _ = QFileDialog.getSaveFileName(
                self, "Save Image",
                f"{self.state.mode.name.lower()}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.png",
                "PNG Files (*.png)"
            )
            if path:
                self.view_image.save(path)
                self.log(f"Saved image to {path}.")

    def _update_fields(self):
        s = self.state
        self.mode_input.setCurrentText(s.mode.name.lower())
        self.julia_real_input.setText(str(s.julia_param.real))
        self.julia_imag_input.setText(str(s.julia_param.imaginary))
        self.resolution_input.setText(str(s.resolution))
        self.accuracy_input.setText(str(s.accuracy))
        self.palette_input.setCurrentText(s.palette)
        self.start_x_input.setText(str(s.start_x))
        self.start_y_input.setText(str(s.start_y))
        self.view_width_input.setText(str(s.view_width))
        self.canvas_input.setCurrentText(f"{s.canvas_width}x{s.canvas_height}")

    def log(self, msg: str):
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        self.log_view.appendPlainText(f"[{timestamp}] {msg}")
        if self.log_autoscroll_chk.isChecked():
            self.log_view.moveCursor(QTextCursor.MoveOperation.End)

    # ---------- Qt events ----------
    def closeEvent(self, event):
        self.bridge.stop()
        event.accept()
