"""
Core metadata model: axis transforms, items, stores and the info registry.
"""
