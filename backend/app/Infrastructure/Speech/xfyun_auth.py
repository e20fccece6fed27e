import base64
import hashlib
import hmac
from email.utils import formatdate
from typing import Optional
from urllib.parse import urlencode, urlparse


def rfc1123_date() -> str:
    return formatdate(usegmt=True)


def signature_origin(host: str, date: str, path: str) -> str:
    return f"host: {host}\ndate: {date}\nGET {path} HTTP/1.1"


def sign(api_secret: str, origin: str) -> str:
    digest = hmac.new(api_secret.encode("utf-8"), origin.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def authorization_header(api_key: str, signature: str) -> str:
    raw = (
        f'api_key="{api_key}", algorithm="hmac-sha256", '
        f'headers="host date request-line", signature="{signature}"'
    )
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def build_auth_url(url: str, api_key: str, api_secret: str, date: Optional[str] = None) -> str:
    """Signs the websocket URL with the vendor's host/date/request-line HMAC scheme."""
    parsed = urlparse(url)
    host = parsed.netloc
    date = date or rfc1123_date()

    signature = sign(api_secret, signature_origin(host, date, parsed.path))
    query = urlencode(
        {
            "authorization": authorization_header(api_key, signature),
            "date": date,
            "host": host,
        }
    )
    return f"{parsed.scheme}://{host}{parsed.path}?{query}"
