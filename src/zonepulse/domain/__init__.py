"""Domain layer: layer catalog, zone reference data, seeding, formatting.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, api, or config.
"""
