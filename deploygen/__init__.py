"""Genesis accounts, nodes setup and key files for a sharded proof-of-stake network."""

__version__ = "0.1.0"
