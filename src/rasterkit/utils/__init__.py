"""Utility helpers for rasterkit."""
