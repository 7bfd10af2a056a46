"""Scaffolding generator for Express + TypeScript + MongoDB clean-architecture APIs."""

__version__ = "0.1.0"
