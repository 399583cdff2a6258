"""Domain layer: entities, repository protocols and access policy."""
