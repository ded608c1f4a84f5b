"""Sesame command-line interface."""
