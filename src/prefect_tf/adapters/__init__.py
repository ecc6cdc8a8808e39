"""I/O adapters: the Prefect REST API and local state files."""
