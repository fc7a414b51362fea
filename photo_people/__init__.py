"""Person identity management for a photo library."""
