class Surface:
    """
    Abstract base: the drawing calls the render pipeline makes, in canvas terms.
    Subclasses override every method. The Qt implementation lives in
    heart_trail.ui.painter_surface, the headless one is RecordingSurface below.
    """
    width = 0
    height = 0

    def clear(self):
        raise NotImplementedError

    def save(self):
        raise NotImplementedError

    def restore(self):
        raise NotImplementedError

    def translate(self, dx, dy):
        raise NotImplementedError

    def scale(self, sx, sy):
        raise NotImplementedError

    def draw_image(self, frame, x, y, w, h):
        raise NotImplementedError

    def set_fill(self, color):
        raise NotImplementedError

    def set_opacity(self, alpha):
        raise NotImplementedError

    def set_font(self, size):
        raise NotImplementedError

    def fill_text(self, text, x, y):
        raise NotImplementedError


class RecordingSurface(Surface):
    """Headless surface: remembers every call. Used by the benchmark and tests."""
    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.ops = []
        self.opacity = 1.0
        self.fill = None
        self.font_size = None
        self.depth = 0

    def clear(self):
        self.ops.append(('clear',))

    def save(self):
        self.depth += 1
        self.ops.append(('save',))

    def restore(self):
        self.depth -= 1
        self.ops.append(('restore',))

    def translate(self, dx, dy):
        self.ops.append(('translate', dx, dy))

    def scale(self, sx, sy):
        self.ops.append(('scale', sx, sy))

    def draw_image(self, frame, x, y, w, h):
        self.ops.append(('draw_image', x, y, w, h))

    def set_fill(self, color):
        self.fill = color

    def set_opacity(self, alpha):
        self.opacity = alpha
        self.ops.append(('opacity', alpha))

    def set_font(self, size):
        self.font_size = size

    def fill_text(self, text, x, y):
        self.ops.append(('text', text, x, y, self.fill, self.opacity, self.font_size))

    def texts(self):
        return [op for op in self.ops if op[0] == 'text']

    def reset(self):
        self.ops = []
