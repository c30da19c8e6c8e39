"""
Application layer.

Use-case orchestration (UserAppService), DTOs and the assembler.
"""
