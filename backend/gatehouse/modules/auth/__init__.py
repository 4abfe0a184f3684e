"""Auth module: users, user groups, roles and access tokens."""
