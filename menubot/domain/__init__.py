"""Domain layer: pure menu analysis logic."""
