"""Core de banlist-sync: dominio, contratos y servicios sin I/O propio."""
