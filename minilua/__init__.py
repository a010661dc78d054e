"""A tiny Lua-style virtual machine core: value stack, call frames and protected calls."""

__version__ = "0.1.0"
__all__ = ["auxlib", "cli", "objects", "state"]