"""URL helpers."""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _host_key(scheme: str, hostname: str | None, port: int | None) -> tuple[str, int | None]:
    if port == _DEFAULT_PORTS.get(scheme.lower()):
        port = None
    return (hostname or "").lower(), port


def relative_url(absolute: str | None, base_url: str | None) -> str:
    """Return ``absolute`` as a site-relative path when it lives under ``base_url``.

    Hosts are compared case-insensitively with default ports ignored; the
    scheme is not compared so an ``http`` permalink on an ``https`` site is
    still made relative. URLs on another host are returned untouched.
    """

    if not absolute:
        return ""
    target = urlsplit(absolute)
    if not target.netloc or not base_url:
        return absolute

    base = urlsplit(base_url)
    if _host_key(target.scheme, target.hostname, target.port) != _host_key(
        base.scheme, base.hostname, base.port
    ):
        return absolute

    path = target.path or "/"
    prefix = base.path.rstrip("/")
    if prefix and (path == prefix or path.startswith(prefix + "/")):
        path = path[len(prefix):] or "/"
    return urlunsplit(("", "", path, target.query, target.fragment))
