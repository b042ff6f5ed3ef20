"""Typer commands and Rich views."""
