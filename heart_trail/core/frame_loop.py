import time
from collections import deque


class FrameLoop:
    """
    Self-rescheduling frame loop with an explicit stop condition.

    `schedule(callback)` queues the next tick. In the app that is a single-shot
    QTimer; left as None, ticks go on an internal queue drained by run().
    A failing frame is logged and the loop moves on to the next one.
    """
    def __init__(self, step, schedule=None, should_stop=None, max_frames=None, on_finish=None):
        self.step = step
        self._queue = deque()
        self.schedule = schedule if schedule is not None else self._queue.append
        self.should_stop = should_stop if should_stop is not None else (lambda: False)
        self.max_frames = max_frames
        self.on_finish = on_finish

        self.running = False
        self.frames = 0
        self.errors = 0
        self.fps = 0
        self._prev_time = 0

    def start(self):
        if self.running:
            return
        self.running = True
        self.schedule(self._tick)

    def stop(self):
        self.running = False

    def run(self):
        """Drives the loop on the calling thread until it stops."""
        self.start()
        while self._queue:
            self._queue.popleft()()
        return self.frames

    def _done(self):
        if self.max_frames is not None and self.frames >= self.max_frames:
            return True
        return self.should_stop()

    def _tick(self):
        if not self.running:
            return
        if self._done():
            self.running = False
            print(f"🏁 Frame loop finished after {self.frames} frames")
            if self.on_finish is not None:
                self.on_finish()
            return

        # FPS Calculation
        curr_time = time.perf_counter()
        if self._prev_time != 0:
            delta = curr_time - self._prev_time
            if delta > 0:
                self.fps = int(1 / delta)
        self._prev_time = curr_time

        try:
            self.step()
        except Exception as e:
            self.errors += 1
            print(f"⚠️  Frame {self.frames} failed: {e!r}")

        self.frames += 1
        self.schedule(self._tick)
