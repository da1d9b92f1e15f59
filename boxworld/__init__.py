"""A small 3D box world with a walking player, gravity and swept collision."""

__version__ = "0.1.0"
__all__ = ["__version__"]