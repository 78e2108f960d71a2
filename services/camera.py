import os
import threading
from enum import Enum
from typing import Callable, Optional

import cv2
from dotenv import load_dotenv

from errors import DeviceAccessError
from logging_config import logger

load_dotenv()

CAMERA_INDEX = int(os.getenv("CAMERA_INDEX", "0"))
JPEG_QUALITY = 90

class CameraState(str, Enum):
    IDLE = "idle"
    PREVIEWING = "previewing"

class MediaCapture:
    """
    Camera lifecycle for the add-item form.

    Idle -> Previewing on start(), Previewing -> Idle on capture() or stop().
    A captured frame is kept as JPEG bytes until discard() is called.
    Only one device stream is ever open.
    """

    def __init__(self, device_index: int = None, open_device: Callable = None):
        self.device_index = CAMERA_INDEX if device_index is None else device_index
        self._open_device = open_device or cv2.VideoCapture
        self._stream = None
        self._lock = threading.Lock()
        self.captured_image: Optional[bytes] = None

    @property
    def previewing(self) -> bool:
        return self._stream is not None

    @property
    def state(self) -> CameraState:
        return CameraState.PREVIEWING if self.previewing else CameraState.IDLE

    @property
    def has_captured_image(self) -> bool:
        return self.captured_image is not None

    def start(self) -> bool:
        """Open the camera. Returns False, staying idle, when it cannot be opened."""
        with self._lock:
            if self._stream is not None:
                return True
            try:
                self._stream = self._acquire()
            except DeviceAccessError as e:
                logger.error(f"Error accessing camera: {e.message}")
                return False
            logger.info(f"Camera {self.device_index} previewing")
            return True

    def _acquire(self):
        stream = self._open_device(self.device_index)
        if not stream.isOpened():
            stream.release()
            raise DeviceAccessError(f"Camera {self.device_index} is unavailable or access was denied")
        return stream

    def _read_frame(self):
        if self._stream is None:
            raise DeviceAccessError("Camera is not previewing")
        ok, frame = self._stream.read()
        if not ok or frame is None:
            raise DeviceAccessError("Could not read a frame from the camera")
        return frame

    @staticmethod
    def _encode(frame) -> bytes:
        ok, buffer = cv2.imencode(".jpg", frame, [int(cv2.IMWRITE_JPEG_QUALITY), JPEG_QUALITY])
        if not ok:
            raise DeviceAccessError("Could not encode the camera frame")
        return buffer.tobytes()

    def preview_frame(self) -> bytes:
        """Current frame as JPEG bytes for the live preview."""
        with self._lock:
            return self._encode(self._read_frame())

    def capture(self) -> bytes:
        """Snapshot the current frame and release the camera."""
        with self._lock:
            try:
                image = self._encode(self._read_frame())
            except DeviceAccessError:
                self._release()
                raise
            self.captured_image = image
            self._release()
        logger.info(f"Captured {len(image)} byte frame from camera {self.device_index}")
        return image

    def stop(self):
        """Release the camera if it is open. Safe to call at any time."""
        with self._lock:
            self._release()

    def _release(self):
        stream, self._stream = self._stream, None
        if stream is not None:
            stream.release()
            logger.debug(f"Camera {self.device_index} released")

    def discard(self):
        self.captured_image = None
