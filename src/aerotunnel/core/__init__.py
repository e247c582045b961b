"""Core layers: configuration, geometry and I/O."""
