"""Image analysis services that decide whether a camera image shows a cat."""

import os
import random
from typing import Any, List, Optional, Tuple

import cv2
import numpy as np

from .interfaces import ImageServiceInterface
from .error_handler import ImageAnalysisError
from ..config.defaults import CASCADE_SETTINGS
from ..logging_config import get_logger

logger = get_logger("image_service")


class FakeImageService(ImageServiceInterface):
    """Random verdicts, for running the system without a camera model."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        return self._random.random() < 0.5


class OpenCVImageService(ImageServiceInterface):
    """Cat detection using an OpenCV Haar cascade for cat faces."""

    def __init__(self, cascade_path: Optional[str] = None):
        self.cascade_path = cascade_path
        self.haar_cascade = None

        # Detection parameters
        self.scale_factor = CASCADE_SETTINGS["scale_factor"]
        self.min_neighbors = CASCADE_SETTINGS["min_neighbors"]
        self.min_detection_size = CASCADE_SETTINGS["min_size"]
        self.max_detection_size = CASCADE_SETTINGS["max_size"]

        # Preprocessing parameters
        self.blur_kernel_size = CASCADE_SETTINGS["blur_kernel_size"]

    @property
    def model_loaded(self) -> bool:
        return self.haar_cascade is not None

    def load_model(self) -> None:
        """Load the configured cascade, or the cat face cascade bundled with OpenCV."""
        candidates = []
        if self.cascade_path:
            candidates.append(self.cascade_path)
        candidates.extend(os.path.join(cv2.data.haarcascades, name)
                          for name in CASCADE_SETTINGS["cascade_files"])

        for path in candidates:
            if not os.path.exists(path):
                logger.debug(f"Cascade file not found: {path}")
                continue
            cascade = cv2.CascadeClassifier(path)
            if not cascade.empty():
                self.haar_cascade = cascade
                logger.info(f"Loaded Haar cascade from {path}")
                return

        raise ImageAnalysisError(f"No usable cat cascade found (tried {', '.join(candidates)})")

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        """Check whether any cat face candidate reaches the confidence threshold (percent)."""
        if image is None:
            raise ImageAnalysisError("No image to analyse")

        frame = np.asarray(image)
        if frame.size == 0 or frame.ndim not in (2, 3):
            raise ImageAnalysisError(f"Unsupported image shape {frame.shape}")

        if not self.model_loaded:
            self.load_model()

        processed_frame = self._preprocess_frame(frame)
        candidates = self._detect_with_haar_cascade(processed_frame)

        frame_h, frame_w = frame.shape[:2]
        confidences = [self._candidate_confidence(candidate, frame_w, frame_h)
                       for candidate in candidates]

        best = max(confidences, default=0.0)
        logger.debug(f"Found {len(candidates)} cat candidates, best confidence {best:.1f}%")
        return best >= confidence_threshold

    def _preprocess_frame(self, frame: np.ndarray) -> np.ndarray:
        """Convert to an equalized grayscale frame for the cascade."""
        if frame.ndim == 3:
            gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
        else:
            gray = frame

        if gray.dtype != np.uint8:
            gray = cv2.convertScaleAbs(gray)

        blurred = cv2.GaussianBlur(gray, (self.blur_kernel_size, self.blur_kernel_size), 0)
        return cv2.equalizeHist(blurred)

    def _detect_with_haar_cascade(self, frame: np.ndarray) -> List[Tuple[int, int, int, int]]:
        detections = self.haar_cascade.detectMultiScale(
            frame,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            minSize=self.min_detection_size,
            maxSize=self.max_detection_size,
            flags=cv2.CASCADE_SCALE_IMAGE
        )
        return [(int(x), int(y), int(w), int(h)) for x, y, w, h in detections]

    def _candidate_confidence(self, candidate: Tuple[int, int, int, int],
                              frame_w: int, frame_h: int) -> float:
        """Score a candidate in percent; larger, more central boxes score higher."""
        x, y, w, h = candidate
        center_x = x + w // 2
        center_y = y + h // 2

        center_dist = ((center_x - frame_w // 2) ** 2 + (center_y - frame_h // 2) ** 2) ** 0.5
        max_dist = (frame_w ** 2 + frame_h ** 2) ** 0.5
        center_factor = 1.0 - (center_dist / max_dist)

        max_area = self.max_detection_size[0] * self.max_detection_size[1]
        size_factor = min(1.0, (w * h) / max_area)

        confidence = 0.6 + 0.2 * center_factor + 0.2 * size_factor
        return max(0.0, min(1.0, confidence)) * 100.0
