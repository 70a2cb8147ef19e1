"""Application layer: DTOs, ports, entity services and cache-first queries."""
