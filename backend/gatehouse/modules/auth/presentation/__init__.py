"""Auth module transports."""
