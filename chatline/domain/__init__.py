"""Domain layer: entities, error taxonomy and visibility rules."""
