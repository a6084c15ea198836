"""
Core search logic: exceptions, retrieval, indexing and prompts.
"""
