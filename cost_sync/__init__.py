"""
Finale Cost Sync - keeps Shopify variant costs in line with Finale supplier prices.
"""

__version__ = "1.0.0"
