"""Configuration: per-method options, process-wide defaults, logging."""
