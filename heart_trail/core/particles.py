import random

from PyQt5.QtGui import QColor

from heart_trail.config import HUE_SATURATION, HUE_LIGHTNESS


class Particle:
    __slots__ = ('x', 'y', 'text', 'life', 'max_life', 'base_size', 'color')

    def __init__(self, x, y, text, lifespan, base_size, color):
        self.x = x
        self.y = y
        self.text = text
        self.life = lifespan
        self.max_life = lifespan
        self.base_size = base_size
        self.color = color

    @property
    def opacity(self):
        return self.life / self.max_life

    @property
    def size(self):
        return self.base_size * (self.life / self.max_life)

    def __repr__(self):
        return f"Particle({self.text!r} @ ({self.x:.1f}, {self.y:.1f}) life={self.life}/{self.max_life})"


def random_color(rng=random, saturation=HUE_SATURATION, lightness=HUE_LIGHTNESS):
    """Uniform random hue at fixed saturation/lightness, as '#rrggbb'."""
    hue = float(rng.random())
    return QColor.fromHslF(hue, saturation, lightness).name()


class ParticleStore:
    """
    Live particles in spawn order. No capacity bound: pruning every frame keeps
    the size near lifespan x spawns-per-frame.
    """
    def __init__(self):
        self.particles = []

    def __len__(self):
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    def spawn(self, anchor, text_a, size_a, text_b, offset_b, size_b, color, lifespan):
        """Appends a glyph at the anchor and a label at anchor + offset_b, sharing color and lifespan."""
        if lifespan < 1:
            raise ValueError(f"lifespan must be >= 1, got {lifespan}")

        x, y = anchor
        glyph = Particle(x, y, text_a, lifespan, size_a, color)
        label = Particle(x + offset_b[0], y + offset_b[1], text_b, lifespan, size_b, color)
        self.particles.extend((glyph, label))
        return glyph, label

    def age_and_prune(self):
        """
        Decrements every particle once and drops the ones that hit zero.
        Returns the survivors; draw from their post-decrement life.
        """
        for particle in self.particles:
            particle.life -= 1
        self.particles[:] = [p for p in self.particles if p.life > 0]
        return list(self.particles)

    def clear(self):
        self.particles.clear()
