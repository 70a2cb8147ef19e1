"""Core: configuration, constants, lifespan, exception handlers."""
