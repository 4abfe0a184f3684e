"""Core building blocks shared by every feature module.

Architecture Components:
- domain: Base domain primitives (ValueObject, Entity, AggregateRoot, DomainEvent)
- application: Per-request application context
- cqrs: Command and query handler contracts, pagination
- events: Domain event dispatching
- security: Role checks and JWT access tokens
- Cross-cutting: configuration, errors, logging, database
"""
