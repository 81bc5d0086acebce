#!/usr/bin/env python3
"""
Services package initialization.
"""

from .bucket_service import BucketReconciler, SetupAction, ensure_configured
from .upload_service import ChunkedUploader, plan_parts
from .share_service import ShareResult, ShareService, build_public_url

__all__ = [
    "BucketReconciler",
    "SetupAction",
    "ensure_configured",
    "ChunkedUploader",
    "plan_parts",
    "ShareResult",
    "ShareService",
    "build_public_url",
]
