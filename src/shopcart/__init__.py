"""
shopcart - headless cart, pricing and recommendation engine for the storefront.
"""

__version__ = "0.1.0"
