"""University records search service."""
