"""prefect-tf: declarative lifecycle management for Prefect resources.

Layout:
- `core`: configuration, domain models, diagnostics, resources and data sources.
- `adapters`: I/O against the Prefect REST API and local state files.
- `cli`: Typer entry-points.
"""

__version__ = "0.1.0"
