"""
API request/response models.
"""
