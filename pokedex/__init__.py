"""Interactive command-line Pokedex: an expiring cache, a PokeAPI client and a command shell."""

__version__ = "0.1.0"
__all__ = ["__version__"]