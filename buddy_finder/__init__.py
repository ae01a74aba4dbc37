"""Find Your Buddy: match people who play the same sport in the same area."""

__version__ = "0.1.0"
