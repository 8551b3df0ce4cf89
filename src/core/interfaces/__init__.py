"""Interfaces/abstracciones del Core.

El composer depende de estos contratos (Protocol), no de los adaptadores
concretos de Maven/HTTP.
"""
