"""Orchestration: the provider registry and lifecycle pipelines."""
