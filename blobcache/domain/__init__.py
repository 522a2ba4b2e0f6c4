"""Domain layer: value objects and the abstract ports the rest of the
application depends on."""
