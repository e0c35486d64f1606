"""Outbound HTTP client setup."""

from collections.abc import Mapping

import httpx

from yt_transcript_resolver.config import NetworkOptions

WATCH_URL = "https://www.youtube.com/watch"
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_4) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/85.0.4183.83 Safari/537.36"
)


def cookie_header(cookies: Mapping[str, str]) -> str:
    return "; ".join(f"{name}={value}" for name, value in cookies.items())


def build_client(network: NetworkOptions) -> httpx.AsyncClient:
    headers = {
        "Accept-Language": network.accept_language,
        "User-Agent": USER_AGENT,
    }
    if network.cookie:
        headers["Cookie"] = network.cookie
    return httpx.AsyncClient(
        headers=headers,
        timeout=network.timeout,
        follow_redirects=True,
        proxy=network.proxy or None,
    )
