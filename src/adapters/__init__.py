"""Adaptadores de infraestructura: Graph (httpx), CSV y exportación a disco."""
