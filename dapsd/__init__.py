"""dapsd — multi-tenant documentation directory server."""

__version__ = "0.1.0"
