"""
pygame front end. Thin adapters over stripworks.core.
"""
