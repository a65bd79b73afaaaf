"""Map object keys to public URLs and back.

A stored URL may have been issued under the configured custom domain, the
default ``<bucket>.storage.googleapis.com`` domain, the path-style
``storage.googleapis.com/<bucket>`` domain, or a domain from an older
configuration. ``decode_object_key`` accepts all of them and never raises.
"""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import urlsplit

from core.storage.domain import DEFAULT_DOMAIN_SUFFIX

logger = logging.getLogger(__name__)

_REPEATED_SLASHES = re.compile(r"/{2,}")
# Keeps the "//" of "scheme://".
_REPEATED_SLASHES_OUTSIDE_SCHEME = re.compile(r"(?<!:)/{2,}")


def encode_public_url(asset_domain: str, key: str) -> str:
    return _REPEATED_SLASHES_OUTSIDE_SCHEME.sub("/", f"{asset_domain}/{key}")


def default_url_prefixes(bucket: str) -> re.Pattern[str]:
    escaped_bucket = re.escape(bucket)
    escaped_suffix = re.escape(DEFAULT_DOMAIN_SUFFIX)
    return re.compile(
        rf"^https?://(?:{escaped_bucket}\.{escaped_suffix}|{escaped_suffix}/{escaped_bucket})(?=/|$)",
        re.IGNORECASE,
    )


def _normalize_key(value: str) -> str:
    return _REPEATED_SLASHES.sub("/", value.lstrip("/"))


def _last_segment(url: str) -> str:
    return url.rsplit("/", 1)[-1]


def decode_object_key(url: Any, asset_domain: str, bucket: str) -> str:
    if not isinstance(url, str) or not url:
        return ""

    try:
        if asset_domain and url.startswith(asset_domain):
            remainder = url[len(asset_domain):]
            if not remainder or remainder.startswith("/"):
                return _normalize_key(remainder)

        default_match = default_url_prefixes(bucket).match(url) if bucket else None
        if default_match:
            return _normalize_key(url[default_match.end():])

        path = urlsplit(url).path
        segments = [segment for segment in path.split("/") if segment]
        if segments and segments[0] == bucket:
            segments.pop(0)
        return _normalize_key("/".join(segments))
    except ValueError:
        logger.debug("Falling back to last path segment for unparsable url %r", url)
        return _last_segment(url)
