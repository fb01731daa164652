"""Domain layer: grammar vocabulary, declarations, and signature parsing."""
