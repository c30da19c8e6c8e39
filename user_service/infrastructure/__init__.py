"""
Infrastructure layer.

Storage and cache adapters implementing the domain ports.
"""
