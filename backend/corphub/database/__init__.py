"""
Database package for CorpHub.
"""
