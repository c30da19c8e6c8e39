"""
Domain layer.

Contains the User aggregate and the repository port the application
layer depends on.
"""
