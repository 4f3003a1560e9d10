"""Imperative shell: typer command implementations."""
