"""
Core architecture components shared by all domains
"""
