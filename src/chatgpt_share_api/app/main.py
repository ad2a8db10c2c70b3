#!/usr/bin/env python3
import json
from typing import Any

from chatgpt_share_api.app.config import FETCH_ROUTE, generate_request_id, get_settings
from chatgpt_share_api.app.process_event import (
    build_share_request,
    get_method_and_path,
    parse_body,
)
from chatgpt_share_api.infrastructure.platform_manager import create_logger
from chatgpt_share_api.services.errors import ShareAPIError, ValidationError
from chatgpt_share_api.services.fetch_service import fetch_conversation

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

BANNER = {
    "message": "Headless browser API for fetching ChatGPT shared conversations",
    "status": "running",
    "usage": f'POST {FETCH_ROUTE} with {{ "shareUrl": "https://chatgpt.com/share/..." }}',
}

KNOWN_ROUTES = ("/", FETCH_ROUTE, "/healthz")


def create_response(
    status_code: int,
    body: str,
    content_type: str = "text/plain",
    headers: dict[str, str] | None = None,
) -> dict[str, Any]:
    """
    Create a standard HTTP response. CORS headers are always included.

    Args:
        status_code (int): HTTP status code.
        body (str): Response body.
        content_type (str, optional): Content-Type header. Defaults to "text/plain".
        headers (dict[str, str] | None, optional): Additional headers. Defaults to None.

    Returns:
        dict: Lambda proxy style response dictionary.
    """
    response_headers = {"Content-Type": content_type, **CORS_HEADERS}
    if headers:
        response_headers.update(headers)

    return {
        "statusCode": status_code,
        "body": body,
        "headers": response_headers,
        "isBase64Encoded": False,
    }


def create_json_response(status_code: int, data: dict[str, Any]) -> dict[str, Any]:
    return create_response(status_code, json.dumps(data, ensure_ascii=False), "application/json")


def handle_fetch(event: dict[str, Any], request_id: str) -> dict[str, Any]:
    """Validate the share URL, render the page and build the response envelope."""
    settings = get_settings()
    logger = create_logger(settings.log_level)

    body_json = parse_body(event)
    try:
        share_request = build_share_request(body_json)
    except ValidationError as e:
        logger.error(f"[{request_id}] Invalid request: {e.message}")
        return create_json_response(e.status_code, e.to_dict())

    logger.info(f"[{request_id}] Fetching {share_request.share_url}")
    try:
        result = fetch_conversation(share_request, settings, logger)
    except ShareAPIError as e:
        logger.error(f"[{request_id}] {type(e).__name__}: {e.message}")
        return create_json_response(e.status_code, e.to_dict())
    except Exception as e:
        logger.error(f"[{request_id}] Unexpected error: {e}")
        return create_json_response(500, {"error": ShareAPIError.error, "message": str(e)})

    data: dict[str, Any] = {"success": True, **result.to_dict()}
    data["shareUrl"] = share_request.share_url
    return create_json_response(200, data)


def process(event: dict[str, Any]) -> dict[str, Any]:
    """Process the incoming HTTP Gateway event."""
    settings = get_settings()
    logger = create_logger(settings.log_level)

    request_id = generate_request_id()
    method, path = get_method_and_path(event)
    logger.info(f"[{request_id}] Processing request: {method} {path}")

    if path not in KNOWN_ROUTES:
        logger.error(f"[{request_id}] No route found for {path}")
        return create_response(404, "Route and method not Found")

    # CORS preflight
    if method == "OPTIONS":
        return create_response(200, "")

    if method == "GET" and path == "/healthz":
        return create_json_response(200, {"ok": True})

    if method == "GET":
        return create_json_response(200, BANNER)

    if method == "POST" and path == FETCH_ROUTE:
        return handle_fetch(event, request_id)

    logger.error(f"[{request_id}] Method not allowed: {method} {path}")
    return create_json_response(405, {"error": "Method not allowed"})
