from concurrent.futures import Future, ThreadPoolExecutor


class AsyncLandmarkSource:
    """
    Runs detector.estimate() on a single worker thread and hands back a Future.
    One worker means detections can never overlap.
    """
    def __init__(self, detector):
        self.detector = detector
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='landmarks')
        self.closed = False

    def submit(self, frame, size=None):
        return self.executor.submit(self.detector.estimate, frame, size)

    def close(self):
        if self.closed:
            return
        self.closed = True
        if hasattr(self.detector, 'close'):
            self.executor.submit(self.detector.close)
        self.executor.shutdown(wait=False)


class InlineLandmarkSource:
    """Same interface, but estimates on the caller's thread. For headless runs."""
    def __init__(self, detector):
        self.detector = detector

    def submit(self, frame, size=None):
        future = Future()
        try:
            future.set_result(self.detector.estimate(frame, size))
        except Exception as e:
            future.set_exception(e)
        return future

    def close(self):
        if hasattr(self.detector, 'close'):
            self.detector.close()
