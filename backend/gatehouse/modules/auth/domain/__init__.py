"""
Auth Domain

Users, user groups and roles, with the value objects, events and error codes
that describe them.
"""
