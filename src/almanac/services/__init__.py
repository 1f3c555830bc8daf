"""Service layer — pipeline operations returning ServiceResult.

Services may import from domain and config.
They must never import from commands or output.
"""
