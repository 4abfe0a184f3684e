"""Transports: REST and GraphQL."""
