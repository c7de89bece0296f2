"""Operational scripts for the Charcha Manch service."""
