"""Infrastructure adapters for flixor-cache."""
