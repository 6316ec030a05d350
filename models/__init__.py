import logging
from .gemini_client import get_gemini

__all__ = ["get_gemini"]

"""
Models package initialization.
Exposes the Gemini model factory used for summary refinement.
"""


logging.getLogger(__name__).addHandler(logging.NullHandler())
