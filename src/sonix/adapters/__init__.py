"""Adapters (implementações concretas das interfaces do núcleo)."""
