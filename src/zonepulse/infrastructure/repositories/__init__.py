"""Read-side repositories over the backing store."""
