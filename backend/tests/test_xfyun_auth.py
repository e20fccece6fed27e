import base64
import hashlib
import hmac
from urllib.parse import parse_qs, urlparse

from app.Infrastructure.Speech.xfyun_auth import build_auth_url, sign, signature_origin

DATE = "Fri, 07 Mar 2025 08:00:00 GMT"


def test_signature_origin_lists_host_date_and_request_line():
    origin = signature_origin("tts-api.xfyun.cn", DATE, "/v2/tts")

    assert origin == f"host: tts-api.xfyun.cn\ndate: {DATE}\nGET /v2/tts HTTP/1.1"


def test_sign_is_base64_hmac_sha256():
    expected = base64.b64encode(
        hmac.new(b"secret", b"payload", hashlib.sha256).digest()
    ).decode()

    assert sign("secret", "payload") == expected
    assert sign("secret", "payload") == sign("secret", "payload")
    assert sign("other", "payload") != expected


def test_auth_url_carries_authorization_date_and_host():
    url = build_auth_url("wss://tts-api.xfyun.cn/v2/tts", "key123", "secret", date=DATE)

    parsed = urlparse(url)
    params = parse_qs(parsed.query)
    assert parsed.scheme == "wss"
    assert parsed.netloc == "tts-api.xfyun.cn"
    assert parsed.path == "/v2/tts"
    assert params["date"] == [DATE]
    assert params["host"] == ["tts-api.xfyun.cn"]

    authorization = base64.b64decode(params["authorization"][0]).decode()
    signature = sign("secret", signature_origin("tts-api.xfyun.cn", DATE, "/v2/tts"))
    assert authorization == (
        'api_key="key123", algorithm="hmac-sha256", '
        f'headers="host date request-line", signature="{signature}"'
    )
