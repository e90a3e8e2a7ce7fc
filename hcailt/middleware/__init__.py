from hcailt.middleware.cors import (
    AllowListCORSMiddleware,
    cors_headers,
    is_origin_allowed,
    resolve_origin,
)

__all__ = [
    "AllowListCORSMiddleware",
    "cors_headers",
    "is_origin_allowed",
    "resolve_origin",
]
