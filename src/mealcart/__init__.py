"""
Mealcart grocery assistant package.

The package turns free-text grocery and meal-planning requests into catalog-grounded
completions and reconciles whatever shape the model answers with into a single
presentation model for the UI.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
