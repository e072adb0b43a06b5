import logging
import os
from datetime import datetime

import cv2
import numpy as np
import pygame

logger = logging.getLogger(__name__)

RECORDINGS_DIR = "recordings"


def default_output_file(prefix: str = "maze") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    fname = f"{prefix}_{ts}.mp4"
    if os.path.isdir(RECORDINGS_DIR):
        return os.path.join(RECORDINGS_DIR, fname)
    return fname


class VideoRecorder:
    """Writes every captured viewer frame to an mp4 file."""

    def __init__(self, active=False, output_file=None, fps=30, prefix="maze"):
        self.active = active
        self.fps = fps
        self.writer = None
        self.frame_size = None
        self.frame_count = 0
        self.output_file = output_file or (default_output_file(prefix) if active else None)

    @staticmethod
    def surface_to_frame(surface: pygame.Surface) -> np.ndarray:
        # surfarray is (width, height, 3) RGB, video frames are (height, width, 3) BGR
        view = pygame.surfarray.array3d(surface)
        frame = np.ascontiguousarray(np.transpose(view, (1, 0, 2)))
        return cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        size = surface.get_size()
        if self.writer is None:
            self.frame_size = size
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, self.frame_size)
            logger.info("Recording started: %s", self.output_file)
        elif size != self.frame_size:
            # VideoWriter cannot change size mid-stream
            surface = pygame.transform.scale(surface, self.frame_size)

        self.writer.write(self.surface_to_frame(surface))
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info("Video saved: %s (%d frames)", self.output_file, self.frame_count)
            self.writer = None
