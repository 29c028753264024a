"""Core wiring: protocols and the dependency container."""
