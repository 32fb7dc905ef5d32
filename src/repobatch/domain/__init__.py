"""Domain layer: entities, ports, and the batch engine."""
