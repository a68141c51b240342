"""
Request canonicalization and HMAC-SHA256 signing.
The service re-signs the sorted, percent-encoded query on its side, so every
byte produced here has to match what it computes.
"""
import base64
import hashlib
import hmac
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Tuple
from urllib.parse import quote

REQUEST_METHOD = "GET"
REQUEST_URI = "/onca/xml"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


@dataclass(frozen=True)
class SignedRequest:
    """A fully assembled request URL and the pieces it was built from."""
    url: str
    canonical_query: str
    signature: str

    @property
    def unsigned_url(self) -> str:
        """URL without the signature, safe to log."""
        return self.url.split("&Signature=", 1)[0]


def percent_encode(value: Any) -> str:
    """RFC 3986 encoding: only unreserved characters stay literal, `~` included."""
    return quote(str(value), safe="~")


def canonicalize(parameters: Mapping[str, Any]) -> str:
    """Sort parameters by key byte value and join encoded pairs with `&`."""
    pairs = sorted(
        ((str(key), str(value)) for key, value in parameters.items()),
        key=lambda pair: pair[0].encode("utf-8")
    )
    return "&".join(
        f"{percent_encode(key)}={percent_encode(value)}" for key, value in pairs
    )


def request_timestamp(now: Optional[datetime] = None) -> str:
    """UTC timestamp at second precision with a `Z` suffix."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def sign(parameters: Mapping[str, Any], secret_key: str, host: str,
         method: str = REQUEST_METHOD, uri: str = REQUEST_URI) -> Tuple[str, str]:
    """
    Canonicalize parameters and compute their request signature.

    Args:
        parameters: Request parameters; values are stringified before encoding
        secret_key: HMAC key
        host: Host the request is sent to, part of the signed string
        method: HTTP method, part of the signed string
        uri: Request path, part of the signed string

    Returns:
        (canonical query string, percent-encoded base64 signature)
    """
    canonical_query = canonicalize(parameters)
    string_to_sign = "\n".join([method, host, uri, canonical_query])

    digest = hmac.new(
        secret_key.encode("utf-8"),
        string_to_sign.encode("utf-8"),
        hashlib.sha256
    ).digest()
    signature = base64.b64encode(digest).decode("ascii")

    return canonical_query, percent_encode(signature)


def build_signed_request(parameters: Mapping[str, Any], secret_key: str, host: str,
                         method: str = REQUEST_METHOD, uri: str = REQUEST_URI,
                         scheme: str = "http") -> SignedRequest:
    """Sign parameters and assemble the request URL."""
    canonical_query, signature = sign(parameters, secret_key, host, method, uri)
    url = f"{scheme}://{host}{uri}?{canonical_query}&Signature={signature}"
    return SignedRequest(url=url, canonical_query=canonical_query, signature=signature)
