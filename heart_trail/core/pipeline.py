import random
from collections import namedtuple
from concurrent.futures import wait

from heart_trail.config import (
    PARTICLE_LIFESPAN, GLYPH_TEXT, GLYPH_SIZE, LABEL_TEXT, LABEL_SIZE, LABEL_OFFSET, DETECTION_WAIT_S
)
from heart_trail.core.gestures import GestureClassifier, Trigger, NO_GESTURE
from heart_trail.core.particles import ParticleStore, random_color
from heart_trail.core.session import ReadinessFlag

FrameReport = namedtuple('FrameReport', ['trigger', 'detected', 'spawned', 'drawn'])


class RenderPipeline:
    """
    One call to render_frame() per display refresh:
      1. clear, 2. mirrored camera background,
      3-5. (ready only) detect -> classify -> spawn a glyph/label pair,
      6. age, prune and draw particles at mirrored X.

    Particles live in camera space; only drawing flips X.
    """
    def __init__(self, readiness=None, classifier=None, store=None, rng=None,
                 lifespan=PARTICLE_LIFESPAN, detection_wait=DETECTION_WAIT_S):
        self.readiness = readiness if readiness is not None else ReadinessFlag()
        self.classifier = classifier if classifier is not None else GestureClassifier()
        self.store = store if store is not None else ParticleStore()
        self.rng = rng if rng is not None else random.Random()
        self.lifespan = lifespan
        self.detection_wait = detection_wait

        self.source = None
        self.pending = None

    def attach_source(self, source):
        self.source = source

    @property
    def detecting(self):
        return self.readiness.is_set() and self.source is not None

    def render_frame(self, surface, frame):
        surface.clear()
        self.draw_background(surface, frame)

        event = NO_GESTURE
        detected = False
        if self.detecting and frame is not None:
            detections = self.poll_detection(frame, (surface.width, surface.height))
            if detections is not None:
                detected = True
                event = self.classifier.classify(detections)

        spawned = 0
        if event.trigger is not Trigger.NONE:
            spawned = len(self.spawn_pair(event.anchor))

        drawn = self.draw_particles(surface)
        return FrameReport(event.trigger, detected, spawned, drawn)

    def draw_background(self, surface, frame):
        if frame is None:
            return
        # Selfie view: flip the image, not the coordinates
        surface.save()
        surface.translate(surface.width, 0)
        surface.scale(-1, 1)
        surface.draw_image(frame, 0, 0, surface.width, surface.height)
        surface.restore()

    def poll_detection(self, frame, size):
        """
        Returns this frame's detections, or None when the request is still in
        flight after the wait budget. A pending request is never doubled up:
        later frames skip detection until it lands.
        """
        if self.pending is None:
            self.pending = self.source.submit(frame, size)

        done, _ = wait([self.pending], timeout=self.detection_wait)
        if not done:
            return None

        future, self.pending = self.pending, None
        return future.result()

    def spawn_pair(self, anchor):
        color = random_color(self.rng)
        return self.store.spawn(
            anchor, GLYPH_TEXT, GLYPH_SIZE, LABEL_TEXT, LABEL_OFFSET, LABEL_SIZE, color, self.lifespan
        )

    def draw_particles(self, surface):
        survivors = self.store.age_and_prune()
        for particle in survivors:
            surface.set_opacity(particle.opacity)
            surface.set_font(particle.size)
            surface.set_fill(particle.color)
            surface.fill_text(particle.text, surface.width - particle.x, particle.y)

        # Never let particle alpha bleed into the next background
        surface.set_opacity(1.0)
        return len(survivors)
