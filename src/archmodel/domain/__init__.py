"""Domain layer — elements, relationships, the model graph and its persisted form.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
