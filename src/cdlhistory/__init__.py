"""Temporal analysis of USDA Cropland Data Layer classifications at a point."""
