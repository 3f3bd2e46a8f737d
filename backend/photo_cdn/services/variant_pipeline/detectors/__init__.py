"""
Format Detection Components
"""

from .format_sniffer import classify, is_heic

__all__ = ["classify", "is_heic"]
