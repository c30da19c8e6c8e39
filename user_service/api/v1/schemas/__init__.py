"""
API v1 schemas.
"""
from .common import ApiResponse, ErrorCode

__all__ = ["ApiResponse", "ErrorCode"]
