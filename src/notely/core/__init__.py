"""Domain layer: models, schemas, repositories and services."""
