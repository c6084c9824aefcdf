"""Infraestrutura (HTTP e logging)."""
