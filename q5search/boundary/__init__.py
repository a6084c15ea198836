"""
Boundary layer: database, vector document store and model providers.
"""
