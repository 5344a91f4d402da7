"""Convex bodies, random walks, ratio estimators and volume computation."""

__version__ = "0.1.0"

__all__ = [
    "ball",
    "cooling",
    "exact",
    "formats",
    "intersection",
    "policies",
    "ratio",
    "rotation",
    "walks",
    "zonotope",
]