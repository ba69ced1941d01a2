"""Servicios del Core (orquestación sin I/O propio)."""
