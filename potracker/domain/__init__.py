"""Domain layer: entity registry, enums, exceptions, value objects."""
