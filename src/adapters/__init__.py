"""Adapters to external systems (HTTP / GraphQL)."""
