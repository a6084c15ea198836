"""
Quantum5ocial semantic search service.

Indexes platform entities into a pgvector-backed document table and serves
retrieval-augmented chat, job recommendations and the personalized feed.
"""

__version__ = "0.1.0"
