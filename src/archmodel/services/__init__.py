"""Service layer — model operations returning ServiceResult.

Services may import from domain, analysis, plugins and infrastructure.
They must never import from commands or output.
"""
