"""Servicios del Core: validación, merge, reconciliación y orquestación."""
