"""Auth infrastructure: persistence models, repositories and provider adapters."""
