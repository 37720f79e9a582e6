"""HTTP request handlers: map authorization decisions to responses."""
