"""
Core domain layer: models, validators, row transformation and settings.
"""
