#!/usr/bin/env python3
"""
s3share - share files through a public S3 URL.
"""

__version__ = "1.0.0"
