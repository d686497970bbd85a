# =============================================================================
# CONFIGURATION
# Central source of truth for all constants and settings.
# =============================================================================

# --- CAMERA ---
CAMERA_SOURCE = 0
CAMERA_WIDTH = 1280
CAMERA_HEIGHT = 720
FPS = 60
FRAME_INTERVAL_MS = int(1000 / FPS)
# Consecutive failed reads before the camera counts as gone
MAX_READ_FAILURES = 30

# Stream schemes that carry frames unencrypted over the network
INSECURE_SCHEMES = ('http', 'rtsp', 'rtmp', 'udp', 'tcp')

# --- DETECTOR ---
MODEL_VARIANT = 'full'
MODEL_COMPLEXITY = {'lite': 0, 'full': 1}
DETECTION_CONFIDENCE = 0.5
TRACKING_CONFIDENCE = 0.5
DETECTION_WAIT_S = 0.05

# --- GESTURES ---
TRIGGER_MODE = 'point'
PINCH_THRESHOLD = 30.0
THUMB_TIP = 4
INDEX_TIP = 8

# --- PARTICLES ---
PARTICLE_LIFESPAN = 40
GLYPH_TEXT = '❤️'
GLYPH_SIZE = 30
LABEL_TEXT = 'love'
LABEL_SIZE = 16
LABEL_OFFSET = (18, -26)
HUE_SATURATION = 1.0
HUE_LIGHTNESS = 0.65

# --- UI ---
WINDOW_TITLE = 'Heart Trail'
FONT_FAMILY = 'Arial'
COLORS = {
    'background': '#000000',
    'text': '#FFFFFF',
    'hud_ok': '#00FF00',
    'hud_warn': '#FFA500',
    'error': '#FF4757'
}
