# record_screen/progress_display.py
from typing import Optional

from tqdm import tqdm


class RecordingProgress:
    """
    Shows how long a recording has been running. With a known duration this
    is a regular progress bar, otherwise an open-ended counter.
    """
    def __init__(self, description: str, duration: Optional[float] = None):
        self.tqdm_bar = tqdm(
            total=round(duration) if duration else None,
            unit='s',
            desc=description,
            ncols=80,
            leave=False
        )
        self._elapsed = 0

    def update(self, elapsed_seconds: float):
        """Advances the bar to `elapsed_seconds` since the start."""
        step = int(elapsed_seconds) - self._elapsed
        if step > 0:
            self.tqdm_bar.update(step)
            self._elapsed += step

    def finish(self):
        self.tqdm_bar.close()
