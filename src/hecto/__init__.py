# src/hecto/__init__.py
"""Hecto: a small terminal text editor."""

__version__ = "0.1.0"
