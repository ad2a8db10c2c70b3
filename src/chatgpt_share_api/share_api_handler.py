from typing import Any

from chatgpt_share_api.app.main import process


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda entry point for the ChatGPT share API."""
    try:
        result = process(event)
        # Type assertion: process() returns dict[str, Any] as declared
        assert isinstance(result, dict)
        return result
    except Exception as e:
        raise Exception(f"Error in processing ChatGPT share request: {e}") from e
