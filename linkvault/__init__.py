"""LinkVault: multi-tenant bookmark store with a Redis read cache."""

__version__ = "1.0.0"
