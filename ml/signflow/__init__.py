"""
SignFlow

English text to sign-language assets, and classifier predictions to a
stable recognised sign.
"""

__version__ = "1.0.0"
