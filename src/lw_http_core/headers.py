"""
Default request headers.

The default set makes a request look like it comes from a desktop
Firefox browser.
"""

from typing import Tuple

from typing_extensions import Final


DEFAULT_USER_AGENT: Final = (
    "Mozilla/5.0 (X11; Linux x86_64; rv:10.0) Gecko/20100101 Firefox/10.0"
)

# Applied in this order
DEFAULT_HEADERS: Final[Tuple[Tuple[str, str], ...]] = (
    ("User-Agent", DEFAULT_USER_AGENT),
    (
        "Accept",
        "text/html, application/xml;q=0.9, application/xhtml+xml, "
        "image/png, image/jpeg, image/gif, image/x-xbitmap, */*;q=0.1",
    ),
    ("Accept-Language", "en-US,zh-CN,zh;q=0.9,en;q=0.8"),
    ("Accept-Charset", "GBK, utf-8, utf-16, *;q=0.1"),
    ("Accept-Encoding", "deflate, gzip, x-gzip, identity, *;q=0"),
    ("Connection", "Keep-Alive"),
)
