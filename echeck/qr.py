"""
QR Rendering Module

Scanning collaborator that turns payload text into a square QR image.
Check payloads are always rendered at the highest error-correction level.
"""

import io
import logging
from abc import ABC, abstractmethod
from typing import Any

import qrcode
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from qrcode.image.pil import PilImage
from PIL import Image


logger = logging.getLogger(__name__)

ERROR_CORRECTION_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}

DEFAULT_SIZE = 250
FOREGROUND = "#1e293b"
BACKGROUND = "white"


class QRRenderer(ABC):
    """Abstract interface for QR image renderers"""

    @abstractmethod
    def render(self, payload: str, size: int = DEFAULT_SIZE, error_correction: str = "H") -> Any:
        """Render payload into an image surface of size x size pixels"""
        pass

    @abstractmethod
    def render_png(self, payload: str, size: int = DEFAULT_SIZE, error_correction: str = "H") -> bytes:
        """Render payload as PNG bytes"""
        pass


class QRCodeRenderer(QRRenderer):
    """Renderer backed by the qrcode library with Pillow images"""

    def __init__(self, border: int = 4):
        self.border = border

    def render(self, payload: str, size: int = DEFAULT_SIZE, error_correction: str = "H") -> Image.Image:
        if not payload:
            raise ValueError("Payload must be a non-empty string")
        if size <= 0:
            raise ValueError("Size must be positive")
        level = ERROR_CORRECTION_LEVELS.get(error_correction.upper())
        if level is None:
            raise ValueError(f"Unknown error correction level: {error_correction}")

        code = qrcode.QRCode(error_correction=level, box_size=10, border=self.border)
        code.add_data(payload)
        code.make(fit=True)

        image = code.make_image(
            image_factory=PilImage, fill_color=FOREGROUND, back_color=BACKGROUND
        ).get_image()
        logger.debug("Rendered QR version %s for %d byte payload", code.version, len(payload))
        return image.convert("RGB").resize((size, size), Image.Resampling.NEAREST)

    def render_png(self, payload: str, size: int = DEFAULT_SIZE, error_correction: str = "H") -> bytes:
        buffer = io.BytesIO()
        self.render(payload, size, error_correction).save(buffer, format="PNG")
        return buffer.getvalue()
