"""Reusable patterns for building resource verticals.

Each module is a self-contained pattern that can be adapted to any domain,
starting with the generic async CRUD repository.
"""
