import argparse
import json
import os
from typing import Any

import requests

BASE = os.getenv("CHATGPT_SHARE_API_URL", "http://localhost:3000")


def fetch_share(share_url: str, base: str = BASE, timeout: int = 180) -> Any:
    r = requests.post(
        f"{base}/api/fetch-chatgpt",
        headers={"Content-Type": "application/json"},
        json={"shareUrl": share_url},
        timeout=timeout,
    )
    r.raise_for_status()
    return r.json()


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch a ChatGPT share link through the API.")
    parser.add_argument("share_url", help="e.g. https://chatgpt.com/share/<id>")
    parser.add_argument("--base", default=BASE, help=f"API base URL (default {BASE})")
    args = parser.parse_args()

    print(json.dumps(fetch_share(args.share_url, base=args.base), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
