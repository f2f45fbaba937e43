"""Domain layer: entities, filters, repository interfaces and business services."""
