"""
Deployment environment overrides.
"""
