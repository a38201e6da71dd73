"""Utility helpers for docsite."""
