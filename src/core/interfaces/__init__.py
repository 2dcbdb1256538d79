"""Core contracts (Protocol).

Adapters implement these; the core depends on the abstractions only.
"""
