"""Resolver package for the GraphQL schema.

Resolvers take the caller's AuthContext explicitly and own one database
session for the duration of the operation.
"""
