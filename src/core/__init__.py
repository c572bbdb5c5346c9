"""Core: domain, contracts, configuration and serialization."""
