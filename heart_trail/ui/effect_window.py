from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, QTimer, QRect
from PyQt5.QtGui import QPainter, QColor, QFont, QImage, QPen, QBrush, QPainterPath

from heart_trail.config import CAMERA_WIDTH, CAMERA_HEIGHT, FRAME_INTERVAL_MS, WINDOW_TITLE, FONT_FAMILY, COLORS
from heart_trail.core.frame_loop import FrameLoop
from heart_trail.core.session import SessionState
from heart_trail.ui.painter_surface import PainterSurface

RESIZE_SETTLE_MS = 300


class EffectWindow(QWidget):
    """
    Mirrored camera view with the particle effect on top.

    Each tick renders the pipeline into an off-screen image; paintEvent only
    blits it and adds the HUD, so a failing frame never escapes into Qt.
    """
    def __init__(self, pipeline, session, frame_interval=FRAME_INTERVAL_MS, max_frames=None):
        super().__init__()
        self.pipeline = pipeline
        self.session = session
        self.frame_interval = frame_interval

        self.current_frame = None
        self.canvas = None
        self.last_report = None

        self.loop = FrameLoop(self.step, self._schedule, max_frames=max_frames, on_finish=self.close)

        # Resize events arrive in bursts; re-open the camera once they settle
        self.resize_timer = QTimer(self)
        self.resize_timer.setSingleShot(True)
        self.resize_timer.timeout.connect(self.session.on_resize)

        self.initUI()

    def initUI(self):
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(CAMERA_WIDTH, CAMERA_HEIGHT)
        self.setFocusPolicy(Qt.StrongFocus)
        self.show()

    def _schedule(self, callback):
        QTimer.singleShot(self.frame_interval, callback)

    def step(self):
        ok, frame = self.session.read_frame()
        if ok:
            self.current_frame = frame

        canvas = QImage(max(1, self.width()), max(1, self.height()), QImage.Format_RGB32)
        painter = QPainter(canvas)
        try:
            surface = PainterSurface(painter, canvas.width(), canvas.height())
            self.last_report = self.pipeline.render_frame(surface, self.current_frame)
        finally:
            painter.end()

        self.canvas = canvas
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        if self.canvas is not None:
            painter.drawImage(0, 0, self.canvas)
        else:
            painter.fillRect(self.rect(), QColor(COLORS['background']))

        self.draw_hud(painter)
        if self.session.state == SessionState.ERROR:
            self.draw_error(painter, self.session.error_message)
        elif self.session.state == SessionState.MODEL_LOADING:
            self.draw_notice(painter, "Loading hand model...")
        painter.end()

    def draw_hud(self, painter):
        painter.setRenderHint(QPainter.Antialiasing)
        path = QPainterPath()
        path.addRoundedRect(10, 10, 220, 64, 10, 10)
        painter.fillPath(path, QBrush(QColor(0, 0, 0, 160)))

        ready = self.pipeline.readiness.is_set()
        fps = self.loop.fps
        painter.setFont(QFont(FONT_FAMILY, 9, QFont.Bold))
        painter.setPen(QColor(COLORS['text']))
        painter.drawText(22, 32, f"MODE: {self.pipeline.classifier.mode.upper()}")
        painter.setPen(QColor(COLORS['hud_ok'] if ready else COLORS['hud_warn']))
        painter.drawText(22, 50, "DETECTOR: READY" if ready else "DETECTOR: OFF")
        painter.setPen(QColor(COLORS['hud_ok'] if fps > 24 else COLORS['hud_warn']))
        painter.drawText(22, 66, f"FPS: {fps} | PARTICLES: {len(self.pipeline.store)}")

    def draw_notice(self, painter, text):
        painter.setFont(QFont(FONT_FAMILY, 14))
        painter.setPen(QColor(COLORS['text']))
        painter.drawText(QRect(0, self.height() - 60, self.width(), 40), Qt.AlignCenter, text)

    def draw_error(self, painter, message):
        box = QRect(self.width() // 2 - 260, self.height() // 2 - 70, 520, 140)
        path = QPainterPath()
        path.addRoundedRect(box.x(), box.y(), box.width(), box.height(), 12, 12)
        painter.fillPath(path, QBrush(QColor(0, 0, 0, 220)))
        painter.setPen(QPen(QColor(COLORS['error']), 2))
        painter.drawPath(path)
        painter.setFont(QFont(FONT_FAMILY, 12))
        painter.drawText(box.adjusted(16, 16, -16, -16), Qt.AlignCenter | Qt.TextWordWrap,
                         f"Something went wrong T_T\n{message}")

    def resizeEvent(self, event):
        super().resizeEvent(event)
        # The first resize (on show) has no valid old size
        if event.oldSize().isValid() and self.session.camera is not None:
            self.resize_timer.start(RESIZE_SETTLE_MS)

    def keyPressEvent(self, event):
        if event.key() in (Qt.Key_Q, Qt.Key_Escape):
            print("\n👋 Exit key pressed - Exiting...")
            self.close()
        elif event.key() == Qt.Key_M:
            self.pipeline.classifier.toggle_mode()

    def closeEvent(self, event):
        self.loop.stop()
        self.session.shutdown()
        super().closeEvent(event)
