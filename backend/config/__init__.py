"""
Configuration package.
"""
