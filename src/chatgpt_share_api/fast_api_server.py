# Local server for the share API.
# Run with: uvicorn chatgpt_share_api.fast_api_server:app --reload --port 3000
# or: chatgpt-share-api (reads HOST and PORT from the environment)
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from chatgpt_share_api.app.config import FETCH_ROUTE, get_settings
from chatgpt_share_api.share_api_handler import lambda_handler


def _lambda_to_fastapi_response(lambda_resp: dict[str, Any]) -> Response:
    """
    Convert an AWS Lambda-style proxy response into a FastAPI Response.

    Args:
        lambda_resp (dict): A dict like:
            {
                "statusCode": int,
                "headers": {"Content-Type": str, ...},
                "body": str,
                "isBase64Encoded": bool
            }

    Returns:
        Response: A FastAPI-compatible Response object carrying every Lambda header.
    """
    status_code = lambda_resp.get("statusCode", 200)
    headers = dict(lambda_resp.get("headers", {}))
    content_type = headers.pop("Content-Type", "text/plain")
    body = lambda_resp.get("body", "")

    if lambda_resp.get("isBase64Encoded", False):
        import base64

        body = base64.b64decode(body)

    return Response(content=body, status_code=status_code, headers=headers, media_type=content_type)


async def _process_request(request: Request) -> Response:
    """Convert a FastAPI request to a Lambda-style event and run the handler."""
    body = await request.body()
    method = request.method
    path = request.url.path
    route_key = f"{method} {path}"

    event = {
        "routeKey": route_key,
        "rawPath": path,
        "body": body,
        "isBase64Encoded": False,
        "headers": dict(request.headers),
        "queryStringParameters": dict(request.query_params),
        "requestContext": {"routeKey": route_key, "http": {"method": method, "path": path}},
    }
    # The handler drives a synchronous browser, so keep it off the event loop
    lambda_response = await run_in_threadpool(lambda_handler, event, None)
    return _lambda_to_fastapi_response(lambda_response)


app: FastAPI = FastAPI(title="ChatGPT Share API")


@app.api_route("/", methods=["GET", "OPTIONS"])
async def index(request: Request) -> Response:
    return await _process_request(request)


@app.api_route(FETCH_ROUTE, methods=["GET", "POST", "OPTIONS", "PUT", "PATCH", "DELETE"])
async def fetch_chatgpt(request: Request) -> Response:
    return await _process_request(request)


@app.get("/healthz")
def healthz() -> dict[str, bool]:
    return {"ok": True}


def main() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
