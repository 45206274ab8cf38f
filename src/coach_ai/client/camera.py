"""Camera capture for form analysis.

Frames are grabbed with OpenCV and sent to ``analyze-form`` as base64 JPEG.
Auto mode repeats capture + analysis every few seconds until stopped.
"""

import asyncio
import base64
import logging
from typing import Awaitable, Callable, Optional

import cv2
import httpx
import numpy as np

from ..exceptions import CoachAIError
from ..models.form_analysis import FormAnalysis

logger = logging.getLogger(__name__)

AUTO_INTERVAL_SECONDS = 4.0
JPEG_QUALITY = 80

FrameSource = Callable[[], Optional[np.ndarray]]
Analyzer = Callable[[str], Awaitable[FormAnalysis]]


class CameraError(RuntimeError):
    pass


def encode_frame(frame: np.ndarray, quality: int = JPEG_QUALITY) -> str:
    """JPEG-encode a BGR frame and return it base64 encoded."""
    ok, jpeg = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, quality])
    if not ok:
        raise CameraError("Could not encode frame as JPEG")
    return base64.b64encode(jpeg.tobytes()).decode("ascii")


class Camera:
    """Thin wrapper over ``cv2.VideoCapture``.

    Usage:
        with Camera(0) as camera:
            image = camera.capture_base64()
    """

    def __init__(self, index: int = 0):
        self.index = index
        self._capture: Optional[cv2.VideoCapture] = None

    def open(self) -> "Camera":
        capture = cv2.VideoCapture(self.index)
        if not capture.isOpened():
            capture.release()
            raise CameraError(f"Could not open camera {self.index}")
        self._capture = capture
        return self

    def read(self) -> Optional[np.ndarray]:
        if self._capture is None:
            raise CameraError("Camera is not open")
        ok, frame = self._capture.read()
        return frame if ok else None

    def capture_base64(self) -> str:
        frame = self.read()
        if frame is None:
            raise CameraError("No frame available")
        return encode_frame(frame)

    def release(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None

    def __enter__(self) -> "Camera":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.release()


class AutoAnalyzer:
    """Captures a frame and analyzes it every ``interval`` seconds.

    ``on_result`` receives each analysis; ``on_error`` receives failures and
    the loop keeps going.
    """

    def __init__(
        self,
        frames: FrameSource,
        analyze: Analyzer,
        on_result: Callable[[FormAnalysis], None],
        on_error: Optional[Callable[[Exception], None]] = None,
        interval: float = AUTO_INTERVAL_SECONDS,
    ):
        self.frames = frames
        self.analyze = analyze
        self.on_result = on_result
        self.on_error = on_error
        self.interval = interval
        self._stopped = asyncio.Event()
        self.runs = 0

    def stop(self) -> None:
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    async def analyze_once(self) -> Optional[FormAnalysis]:
        frame = await asyncio.to_thread(self.frames)
        if frame is None:
            logger.warning("No camera frame available, skipping analysis")
            return None
        image = encode_frame(frame)
        analysis = await self.analyze(image)
        self.on_result(analysis)
        return analysis

    async def run(self) -> None:
        while not self.stopped:
            try:
                await self.analyze_once()
            except (CoachAIError, CameraError, httpx.HTTPError) as e:
                logger.error(f"Auto analysis failed: {e}")
                if self.on_error:
                    self.on_error(e)
            self.runs += 1
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass
