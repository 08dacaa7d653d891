"""
Cornell study note generator
Turns a pasted excerpt into keywords, Q&A pairs, takeaways and a summary
"""

__version__ = "0.1.0"
