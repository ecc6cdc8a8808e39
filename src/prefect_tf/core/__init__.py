"""Core: configuration, domain, resources and data sources."""
