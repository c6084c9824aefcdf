"""Núcleo do Sonix: domínio, interfaces, exceções e serviços."""
