"""Bounded-memory day/night predictor for planet-hopping sequences."""

__version__ = "0.1.0"
