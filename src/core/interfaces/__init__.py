"""Core interfaces/abstractions.

Contracts (Protocol) that concrete serializers and resolvers implement, so
adapters depend on shapes rather than implementations.
"""
