"""Application services built on the domain models."""
