"""
Application layer: use-case services built on the core.
"""
