"""
Photo CDN pipeline.

Generates resized, re-encoded variants of uploaded photos and stores them in
object storage with rollback on partial failure.
"""

__version__ = "0.1.0"
