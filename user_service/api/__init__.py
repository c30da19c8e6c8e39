"""
HTTP transport layer.
"""
