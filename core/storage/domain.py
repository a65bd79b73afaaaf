"""Resolve the public asset domain and key prefix for a bucket.

Three deployment shapes are supported:

* the default ``<bucket>.storage.googleapis.com`` domain,
* a custom domain that mirrors the bucket layout (``https://cdn/bucket``),
* a custom domain with its own path (``https://cdn/bucket/uploads``), whose
  trailing segments become the key prefix.

All of them end up as ``scheme://host[/bucket]`` plus a prefix with no
leading or trailing slash.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from core.storage.config import GCSConfig
from core.storage.types import AssetDomainParseResult, LiteralAssetDomain, ParsedAssetDomain, ResolvedDomain

DEFAULT_DOMAIN_SUFFIX = "storage.googleapis.com"

_ABSOLUTE_HTTP_URL = re.compile(r"^https?://", re.IGNORECASE)


def default_asset_domain(bucket: str, *, insecure: bool = False) -> str:
    scheme = "http" if insecure else "https"
    return f"{scheme}://{bucket}.{DEFAULT_DOMAIN_SUFFIX}"


def normalize_base_path(value: str | None) -> str:
    if not value:
        return ""
    return value.strip("/")


def parse_asset_domain(value: str) -> AssetDomainParseResult:
    try:
        parts = urlsplit(value)
        # Accessing the port validates it; a bad port is a parse failure.
        _ = parts.port
    except ValueError:
        return LiteralAssetDomain(value=value)

    if not parts.scheme or not parts.netloc or not parts.hostname:
        return LiteralAssetDomain(value=value)

    segments = tuple(segment for segment in parts.path.split("/") if segment)
    return ParsedAssetDomain(scheme=parts.scheme.lower(), host=parts.netloc.rsplit("@", 1)[-1], segments=segments)


def resolve_asset_domain(config: GCSConfig) -> ResolvedDomain:
    asset_domain = config.asset_domain
    if asset_domain and _ABSOLUTE_HTTP_URL.match(asset_domain):
        parsed = parse_asset_domain(asset_domain)
        if isinstance(parsed, ParsedAssetDomain):
            segments = list(parsed.segments)
            if segments and segments[0] == config.bucket:
                segments.pop(0)
            domain = f"{parsed.scheme}://{parsed.host}/{config.bucket}"
            base_path = "/".join(segments)
        else:
            domain = parsed.value.rstrip("/")
            base_path = config.base_path or ""
    else:
        domain = default_asset_domain(config.bucket, insecure=config.insecure)
        base_path = config.base_path or ""

    if config.upload_folder_path:
        base_path = config.upload_folder_path

    return ResolvedDomain(asset_domain=domain.rstrip("/"), base_path=normalize_base_path(base_path))
