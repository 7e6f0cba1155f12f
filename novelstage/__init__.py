"""A small pygame visual novel engine driven by JSON page scripts."""

__version__ = "0.1.0"