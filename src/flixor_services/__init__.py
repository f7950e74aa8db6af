"""Cached metadata service wrappers for TMDB, Trakt and Plex.tv."""
