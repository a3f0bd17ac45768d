"""A small Monte Carlo path tracer for a Cornell box of spheres, with a PPM-writing command."""

__version__ = "0.1.0"

__all__ = ["assets", "bvh", "cases", "cli", "geometry", "image", "painterly", "tracer"]