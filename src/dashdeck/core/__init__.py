"""Core functionality for dashdeck: configuration, workspace access, notes and the dashboard API."""
