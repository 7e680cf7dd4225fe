"""
Service layer.

Each service wraps one MongoDB collection and turns driver calls into
``Result`` envelopes, so API handlers never deal with driver
exceptions directly.
"""
