"""Shared helpers for gridedit."""
