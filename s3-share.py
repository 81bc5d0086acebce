#!/usr/bin/env python3
"""
s3share - Command Line Interface
Easily share files with S3 from the command line
"""

from s3share import share

if __name__ == "__main__":
    share.main()
