"""Infrastructure Layer:

Concrete adapters for the domain interfaces: disk and memory cache tiers,
configuration, logging, console display and the HTTP fetcher.
"""
