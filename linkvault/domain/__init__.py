"""Domain layer: error taxonomy and enums (no infrastructure imports)."""
