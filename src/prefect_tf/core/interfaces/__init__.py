"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) implemented by concrete adapters.
- The core depends on abstractions, adapters depend on the core.
"""
