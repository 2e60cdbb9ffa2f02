"""Campaign analytics aggregation engine"""

__version__ = "1.0.0"
