"""
Cart Runner - a one-button arcade runner.

Steer a shopping cart by tapping or shouting, collect boxes for thirty
seconds, and win a product reveal.
"""

__version__ = "0.1.0"
