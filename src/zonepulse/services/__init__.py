"""Service layer: resolution, synthesis, scoring, export.

Services may import from domain, config, and infrastructure layers.
They must never import from commands, output, or api.
"""
