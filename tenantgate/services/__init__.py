"""Domain services. Callers authorize first; services only persist."""
