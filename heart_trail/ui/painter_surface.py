import cv2
from PyQt5.QtCore import QPointF, QRectF
from PyQt5.QtGui import QPainter, QColor, QFont, QImage

from heart_trail.config import FONT_FAMILY, COLORS
from heart_trail.core.surface import Surface


def frame_to_qimage(frame):
    rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
    h, w, ch = rgb_frame.shape
    bytes_per_line = ch * w
    # copy() detaches the image from the numpy buffer
    return QImage(rgb_frame.data, w, h, bytes_per_line, QImage.Format_RGB888).copy()


class PainterSurface(Surface):
    def __init__(self, painter, width, height):
        self.painter = painter
        self.width = width
        self.height = height
        self.font = QFont(FONT_FAMILY)

        painter.setRenderHint(QPainter.Antialiasing)
        painter.setRenderHint(QPainter.TextAntialiasing)

    def clear(self):
        self.painter.fillRect(0, 0, self.width, self.height, QColor(COLORS['background']))

    def save(self):
        self.painter.save()

    def restore(self):
        self.painter.restore()

    def translate(self, dx, dy):
        self.painter.translate(dx, dy)

    def scale(self, sx, sy):
        self.painter.scale(sx, sy)

    def draw_image(self, frame, x, y, w, h):
        self.painter.drawImage(QRectF(x, y, w, h), frame_to_qimage(frame))

    def set_fill(self, color):
        self.painter.setPen(QColor(color))

    def set_opacity(self, alpha):
        self.painter.setOpacity(alpha)

    def set_font(self, size):
        self.font.setPixelSize(max(1, int(round(size))))
        self.painter.setFont(self.font)

    def fill_text(self, text, x, y):
        self.painter.drawText(QPointF(x, y), text)
