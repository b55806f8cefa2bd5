"""Domain layer: field types, value objects, and markdown parsing.

This layer depends only on stdlib, pydantic, and ruamel.yaml.
It must never import from infrastructure, references, entities, or config.
"""
