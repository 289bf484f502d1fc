"""Module management GraphQL service"""

__version__ = "1.0.0"
