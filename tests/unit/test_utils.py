"""Unit tests for core utility functions."""
import base64
import json
from datetime import datetime, timedelta, timezone

import pytest

from app.core.constants import TOKEN_CODE_ALPHABET
from app.core.utils import is_expired, is_token_usable, make_token_code, to_utc, total_pages
from app.services.utils import build_qr_payload, render_token_qr


@pytest.mark.unit
class TestTokenCode:

    def test_default_length_and_alphabet(self):
        code = make_token_code()
        assert len(code) == 6
        assert all(char in TOKEN_CODE_ALPHABET for char in code)

    def test_custom_length(self):
        assert len(make_token_code(10)) == 10

    def test_codes_vary(self):
        codes = {make_token_code() for _ in range(200)}
        assert len(codes) > 190


@pytest.mark.unit
class TestTokenWindow:
    """A token is usable while active and strictly before expiry."""

    NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

    def test_active_and_unexpired(self):
        assert is_token_usable(True, self.NOW + timedelta(minutes=1), self.NOW)

    def test_expiry_boundary_is_exclusive(self):
        assert not is_token_usable(True, self.NOW, self.NOW)
        assert is_expired(self.NOW, self.NOW)

    def test_revoked(self):
        assert not is_token_usable(False, self.NOW + timedelta(hours=1), self.NOW)

    def test_naive_expiry_is_treated_as_utc(self):
        naive = datetime(2026, 10, 18, 12, 30)
        assert is_token_usable(True, naive, self.NOW)
        assert to_utc(naive).tzinfo == timezone.utc


@pytest.mark.unit
class TestPagination:

    def test_total_pages(self):
        assert total_pages(0, 10) == 1
        assert total_pages(10, 10) == 1
        assert total_pages(11, 10) == 2


@pytest.mark.unit
class TestQrRendering:

    def test_payload_embeds_code_and_event(self):
        assert json.loads(build_qr_payload("ABC123", 4)) == {"token": "ABC123", "event_id": 4}

    def test_render_is_svg_data_uri(self):
        uri = render_token_qr("ABC123", 4)
        prefix = "data:image/svg+xml;base64,"

        assert uri.startswith(prefix)
        svg = base64.b64decode(uri[len(prefix):])
        assert b"<svg" in svg
