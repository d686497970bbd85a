class SetupError(Exception):
    """Base class for failures while bringing the camera or detector up."""


class InsecureContext(SetupError):
    """Camera source is an unencrypted network stream."""


class UnsupportedEnvironment(SetupError):
    """This OpenCV build cannot talk to any camera."""


class DetectorUnavailable(SetupError):
    """The hand landmark library failed to import."""


class DeviceError(SetupError):
    """Camera could not be opened or stopped delivering frames (includes denied access)."""
