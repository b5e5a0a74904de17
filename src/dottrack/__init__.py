"""Practice question tracker with spaced review of missed questions."""
__version__ = "0.1.0"
