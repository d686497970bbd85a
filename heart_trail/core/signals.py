from PyQt5.QtCore import QObject, pyqtSignal

class SessionSignals(QObject):
    # Emitted from the model loader thread, delivered on the GUI thread
    model_ready = pyqtSignal(object)
    setup_failed = pyqtSignal(str)
