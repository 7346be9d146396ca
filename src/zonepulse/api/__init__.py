"""HTTP surface: a FastAPI app over the layer, zone and export services."""
