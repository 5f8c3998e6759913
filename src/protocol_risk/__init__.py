"""
protocol-risk - risk assessment client for DeFi protocols
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
