"""Background pattern generation for the Qt front end."""

from PyQt6.QtCore import QThread, pyqtSignal

from models import PatternConfig
from pattern_engine import PatternGenerator, PixelBuffer


class PatternGenerationThread(QThread):
    """Background thread for pattern generation to avoid blocking UI.

    AIDEV-NOTE: cancel() is cooperative. The engine polls it at ring/row
    boundaries; a cancelled run emits `cancelled` and never `finished`.
    """

    finished = pyqtSignal(object)  # GeneratedPattern
    cancelled = pyqtSignal()
    error = pyqtSignal(str)  # Error message
    progress = pyqtSignal(int)  # Progress percentage

    def __init__(
        self,
        pixels: PixelBuffer,
        config: PatternConfig,
        random_state=None,
    ):
        super().__init__()
        self.pixels = pixels
        self.config = config
        self.random_state = random_state
        self._cancel_requested = False

    def cancel(self):
        """Ask a running (or not yet started) generation to stop."""
        self._cancel_requested = True
        self.requestInterruption()

    def should_cancel(self) -> bool:
        return self._cancel_requested or self.isInterruptionRequested()

    def run(self):
        """Execute pattern generation in background."""
        try:
            generator = PatternGenerator(self.config, self.random_state)

            self.progress.emit(10)
            result = generator.generate(self.pixels, should_cancel=self.should_cancel)

            if result is None:
                self.cancelled.emit()
                return

            self.progress.emit(100)
            self.finished.emit(result)

        except Exception as e:
            self.error.emit(str(e))
