from chat_core.providers.headers import build_headers, is_header_safe


def test_is_header_safe():
    assert is_header_safe("sk-abc123")
    assert is_header_safe("")
    assert not is_header_safe("密钥")
    assert not is_header_safe("sk-é")


def test_build_headers_with_ascii_key():
    headers = build_headers("sk-abc123")
    assert headers["Authorization"] == "Bearer sk-abc123"
    assert headers["Content-Type"] == "application/json"


def test_build_headers_skips_non_ascii_key():
    headers = build_headers("sk-密钥")
    assert "Authorization" not in headers
    assert headers["Content-Type"] == "application/json"
