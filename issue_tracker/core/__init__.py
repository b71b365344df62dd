"""Core authentication, security, logging and error primitives."""
