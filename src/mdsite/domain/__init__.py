"""Domain layer — document model, parsing, references, rendering.

This layer depends only on stdlib, pydantic, ruamel.yaml and markupsafe.
It must never import from services, infrastructure, commands, or config.
"""
