"""Simulador y reproductor animado de algoritmos para el cubo Rubik 3x3."""

__version__ = "0.2.0"
