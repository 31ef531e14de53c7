"""
Infrastructure Layer - Addon Publisher

Concrete storage and remote-service implementations of the domain's
abstractions.
"""
