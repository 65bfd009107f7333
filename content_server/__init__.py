"""Recipe and documentation tool server over JSON-RPC stdio."""

__version__ = "1.0.0"
