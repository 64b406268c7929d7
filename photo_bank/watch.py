import logging
import threading
from typing import List, Optional

from . import config
from .core import ImportPipeline
from .models import Imported
from .processing import ProcessStage


class WatchLoop:
    """
    Repeatedly watch for, then import images.

    One batch at a time, on one thread: a photo is never being imported twice
    at once. stop() is honoured at the top of each round, between photos, and
    during the sleep.
    """

    def __init__(self,
                 pipeline: ImportPipeline,
                 interval_minutes: float = config.DEFAULT_POLL_MINUTES,
                 process_stage: Optional[ProcessStage] = None):
        self.pipeline = pipeline
        self.interval_minutes = interval_minutes
        self.process_stage = process_stage
        self._stop = threading.Event()

    def stop(self):
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def run_once(self) -> List[Imported]:
        if self.process_stage is not None:
            self.process_stage.move_processed_to_import()

        outcomes = self.pipeline.import_images(should_stop=self._stop.is_set)
        imported = [o for o in outcomes if isinstance(o, Imported)]
        if imported:
            logging.info(f"Imported images: {[str(o.path) for o in imported]}")
        return imported

    def run(self, max_iterations: Optional[int] = None) -> int:
        """Runs until stopped (or max_iterations rounds). Returns rounds completed."""
        logging.info(f"Watching {self.pipeline.media_root} every {self.interval_minutes} minutes.")
        rounds = 0
        while not self._stop.is_set():
            self.run_once()
            rounds += 1
            if max_iterations is not None and rounds >= max_iterations:
                break
            self._stop.wait(self.interval_minutes * 60)
        return rounds
