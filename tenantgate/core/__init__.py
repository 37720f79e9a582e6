"""Core configuration, logging and authorization."""
