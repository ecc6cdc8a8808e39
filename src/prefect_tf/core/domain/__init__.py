"""Domain models and value types.

Why:
- Pure, strict data structures (Pydantic v2 and dataclasses).
- The domain knows nothing about HTTP, the CLI or state files.
"""
