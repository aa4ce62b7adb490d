"""
Basic GET example using lw_http_core.

This example fetches a URL with the default browser headers and prints
the status code, a few response headers, cookies and the body.

Usage:
    python examples/basic_get.py [url] [cookie-name ...]
"""

import logging
import sys

from lw_http_core import (
    CookieNotFoundError,
    HeaderNotFoundError,
    HTTPCoreError,
    Request,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def fetch(uri: str, cookie_names: list) -> int:
    """Fetch a URI and print what came back."""
    try:
        request = Request(uri, default_headers=True)
    except HTTPCoreError as e:
        logger.error(f"Cannot create request: {e}")
        return 1

    with request:
        try:
            response = request.execute()
        except HTTPCoreError as e:
            logger.error(f"Request failed: {e}")
            return 1

        print(f"code: {response.status_code}")
        for name in ("Content-Type", "Server"):
            try:
                print(f"{name}: {request.get_header(name)}")
            except HeaderNotFoundError:
                pass

        for name in cookie_names:
            try:
                print(f"cookie {name}: {request.get_cookie(name)}")
            except (HeaderNotFoundError, CookieNotFoundError):
                print(f"cookie {name}: <missing>")

        print(f"buf: {response.text()}")
    return 0


if __name__ == "__main__":
    url = sys.argv[1] if len(sys.argv) > 1 else "http://www.google.com"
    sys.exit(fetch(url, sys.argv[2:]))
