"""
StringCase - field case transform stage for structured-record pipelines
"""

__version__ = "0.1.0"
