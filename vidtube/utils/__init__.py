"""
Utility functions for the application
"""
from .validators import (
    is_valid_id,
    validate_id,
    require_text,
    validate_file_extension,
    validate_file_size
)
from .video_processing import extract_video_info

__all__ = [
    # Validators
    "is_valid_id",
    "validate_id",
    "require_text",
    "validate_file_extension",
    "validate_file_size",
    # Video processing
    "extract_video_info",
]
