"""Cleaning utilities for the loader.

Normalizes blank values in the projected CSV columns and validates the
resulting records before they are written to MongoDB.
"""
