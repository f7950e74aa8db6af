"""Core configuration, models and interfaces for flixor-cache."""
