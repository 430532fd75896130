"""
Database package: declarative base and async session management.
"""
