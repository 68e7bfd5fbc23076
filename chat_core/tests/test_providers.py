import pytest

from chat_core.domain.exceptions import ApiError
from chat_core.providers import select_transport
from chat_core.providers.generic_client import GenericStreamClient
from chat_core.providers.native_client import NativeClient


VENDOR_URL = "https://generativelanguage.googleapis.com"


class SettingsStub:
    vendor_host = "generativelanguage.googleapis.com"
    native_translation_model = "flash-translate"
    http_timeout = None


class FakeVendor:
    def __init__(self, chunks=None, error=None):
        self.sessions = []
        self.sent = []
        self.generated = []
        self._chunks = chunks or []
        self._error = error

    def create_session(self, model, instruction, temperature):
        self.sessions.append((model, instruction, temperature))
        return f"handle-{len(self.sessions)}"

    def stream_send(self, handle, text):
        self.sent.append((handle, text))
        for chunk in self._chunks:
            yield chunk
        if self._error:
            raise self._error

    def generate_content(self, model, prompt):
        self.generated.append((model, prompt))
        return "  translated  "


def test_vendor_url_selects_native():
    vendor = FakeVendor()
    transport = select_transport(VENDOR_URL, "gem", "sys", 0.8, vendor, SettingsStub())
    assert isinstance(transport, NativeClient)
    assert vendor.sessions == [("gem", "sys", 0.8)]


def test_other_url_selects_generic():
    vendor = FakeVendor()
    transport = select_transport("https://api.example.com", "gpt", "sys", 0.8, vendor, SettingsStub())
    assert isinstance(transport, GenericStreamClient)
    assert vendor.sessions == []


def test_vendor_url_without_vendor_falls_back_to_generic():
    transport = select_transport(VENDOR_URL, "gem", "sys", 0.8, None, SettingsStub())
    assert isinstance(transport, GenericStreamClient)


def test_native_stream_skips_empty_chunks():
    vendor = FakeVendor(chunks=["a", "", None, "b"])
    client = NativeClient(vendor, "gem", "sys", 1.0, SettingsStub())
    assert list(client.stream("hi")) == ["a", "b"]
    assert vendor.sent == [("handle-1", "hi")]


def test_native_stream_wraps_vendor_error_after_partial_output():
    vendor = FakeVendor(chunks=["partial"], error=RuntimeError("quota exceeded"))
    client = NativeClient(vendor, "gem", "sys", 1.0, SettingsStub())
    received = []
    with pytest.raises(ApiError) as exc:
        for delta in client.stream("hi"):
            received.append(delta)
    assert received == ["partial"]
    assert exc.value.code == "NATIVE_ERROR"
    assert "quota exceeded" in exc.value.message


def test_native_generate_uses_translation_model():
    vendor = FakeVendor()
    client = NativeClient(vendor, "gem", "sys", 1.0, SettingsStub())
    assert client.generate("p") == "  translated  "
    assert vendor.generated == [("flash-translate", "p")]
