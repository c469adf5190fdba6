"""Demographic curve model and pyramid layout for PopuViz."""
