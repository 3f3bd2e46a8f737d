"""
Variant Pipeline Services

- exif_service: capture metadata extraction
- object_store: storage backends (Cloudflare R2)
- upload_service: upload/rollback coordinator
"""

from .exif_service import extract_exif_data
from .object_store import ObjectStore, R2ObjectStore
from .upload_service import PhotoUploadCoordinator, RollbackKeyLog

__all__ = [
    "extract_exif_data",
    "ObjectStore",
    "R2ObjectStore",
    "PhotoUploadCoordinator",
    "RollbackKeyLog",
]
