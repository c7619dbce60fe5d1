"""
Tests for QR rendering of verification payloads
"""

import io
import pytest
from PIL import Image

from echeck.qr import QRCodeRenderer, QRRenderer, DEFAULT_SIZE
from echeck.payload import encode

from conftest import make_draft


@pytest.fixture
def payload(issuer):
    return encode(issuer.issue(make_draft()).record)


class TestQRCodeRenderer:
    """qrcode-backed renderer"""

    def test_is_a_renderer(self):
        assert isinstance(QRCodeRenderer(), QRRenderer)

    def test_default_size(self, payload):
        image = QRCodeRenderer().render(payload)
        assert image.size == (DEFAULT_SIZE, DEFAULT_SIZE) == (250, 250)

    def test_custom_size(self, payload):
        image = QRCodeRenderer().render(payload, size=400, error_correction="M")
        assert image.size == (400, 400)

    def test_png_bytes(self, payload):
        png = QRCodeRenderer().render_png(payload)
        assert png.startswith(b"\x89PNG")
        image = Image.open(io.BytesIO(png))
        assert image.size == (250, 250)

    def test_rejects_unknown_level(self, payload):
        with pytest.raises(ValueError):
            QRCodeRenderer().render(payload, error_correction="X")

    def test_rejects_empty_payload(self):
        with pytest.raises(ValueError):
            QRCodeRenderer().render("")

    def test_rejects_bad_size(self, payload):
        with pytest.raises(ValueError):
            QRCodeRenderer().render(payload, size=0)
