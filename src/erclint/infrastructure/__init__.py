"""Infrastructure layer: reading declarations from source files."""
