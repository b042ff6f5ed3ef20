"""Core: configuration, domain models and pure services (no CLI, no HTTP)."""
