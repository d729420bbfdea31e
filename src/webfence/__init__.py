"""
webfence: show a web site in a browser view with ad and tracker requests blocked.
"""

__version__ = "0.1.0"
