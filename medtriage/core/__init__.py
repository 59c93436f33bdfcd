"""Core pipeline: cephalometry, clinical normalization, cases and inference."""
