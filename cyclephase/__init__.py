"""
Menstrual cycle phase tracking service.
"""
__version__ = "0.1.0"
