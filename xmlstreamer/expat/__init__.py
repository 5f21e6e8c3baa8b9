from .tokenize import ExpatDriver, ExpatTokenizer

__all__ = ["ExpatDriver", "ExpatTokenizer"]
