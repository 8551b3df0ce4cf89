"""Modelos y entidades del dominio.

El dominio no conoce HTTP, ZIP ni CLI: solo coordenadas, entradas y páginas.
"""
