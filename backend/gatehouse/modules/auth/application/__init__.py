"""
Auth Application Layer

Commands, queries and event handlers orchestrating the auth domain.
"""
