"""Geometry, light sources, configuration and IO."""
