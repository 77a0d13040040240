"""Resolver functions backing the root Query and Mutation types."""
