"""Clinic booking availability service."""

__version__ = "0.1.0"
