"""Configuration infrastructure: resource resolution, schema binding, parsing."""
