"""Bundled data package for the S3 provider registry.

This namespace holds the packaged providers document (providers.json).
It is not intended for direct import by users.
"""
