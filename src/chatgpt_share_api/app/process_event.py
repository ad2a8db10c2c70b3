import base64
import binascii
import json
from typing import Any

from chatgpt_share_api.app.config import SHARE_URL_MARKERS
from chatgpt_share_api.infrastructure.data_models import ShareRequest
from chatgpt_share_api.services.errors import ValidationError


def get_method_and_path(event: dict[str, Any]) -> tuple[str, str]:
    """Read the HTTP method and path from an API Gateway (v2) or FastAPI event."""
    http = event.get("requestContext", {}).get("http", {})
    method = http.get("method") or ""
    path = http.get("path") or event.get("rawPath") or ""

    # Fall back to the route key, e.g. "POST /api/fetch-chatgpt"
    if not method or not path:
        route_method, _, route_path = event.get("routeKey", "").partition(" ")
        method = method or route_method
        path = path or route_path

    path = path.rstrip("/") or "/"
    return method.upper(), path


def parse_body(event: dict[str, Any]) -> dict[str, Any]:
    """
    Decode the request body into a dict.

    API Gateway sends the body as a string (base64 encoded for binary payloads), FastAPI
    sends bytes and tests may pass a pre-parsed dict. Anything that is not a JSON object
    becomes an empty dict.
    """
    body_raw = event.get("body") or ""

    if isinstance(body_raw, dict):
        return body_raw

    if event.get("isBase64Encoded") and isinstance(body_raw, str | bytes):
        try:
            body_raw = base64.b64decode(body_raw)
        except (binascii.Error, ValueError):
            return {}

    try:
        if isinstance(body_raw, bytes):
            body_json = json.loads(body_raw.decode("utf-8"))
        else:
            body_json = json.loads(body_raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        body_json = {}

    if not isinstance(body_json, dict):
        body_json = {}
    return body_json


def is_share_url(share_url: Any) -> bool:
    return isinstance(share_url, str) and any(marker in share_url for marker in SHARE_URL_MARKERS)


def build_share_request(body_json: dict[str, Any]) -> ShareRequest:
    """Validate the body and build the share request, before any browser work happens."""
    share_url = body_json.get("shareUrl")
    if not share_url:
        raise ValidationError("shareUrl is required")
    if not is_share_url(share_url):
        raise ValidationError(f"Not a ChatGPT share link: {share_url}")
    return ShareRequest(share_url=share_url.strip())
