"""Infrastructure layer: path arithmetic and file-system backends.

This layer may import from domain (for failure values) and config.
It must never import from references, entities, or the client facade.
"""
