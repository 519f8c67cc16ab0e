"""Pipeline services for WARP config generation."""
