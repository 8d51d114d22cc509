"""Shared URL utilities for composing application URLs and comparing hosts."""

from __future__ import annotations

from urllib.parse import urlparse


def join_url(base_url: str, path: str = "") -> str:
    """Append a path to the base URL; the bare base URL when path is empty."""
    if not path:
        return base_url
    if base_url.endswith("/") and path.startswith("/"):
        path = path.lstrip("/")
    return f"{base_url}{path}"


def host_of(url: str) -> str:
    """Lower-cased network location of a URL ('' for about:blank and friends)."""
    return urlparse(url).netloc.lower()


def same_host(url: str, other: str) -> bool:
    return host_of(url) == host_of(other)
