"""Append-only event repository for CQRS applications."""

__version__ = "0.1.0"
