"""
CollegeMate CLI - terminal front end for the portal
"""

__version__ = "1.0.0"
