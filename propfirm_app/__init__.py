"""
Prop Firm Rules - Strategy Compliance Validation Engine

Validates automated futures trading strategies against proprietary trading
firm account-tier rules (contract limits, daily loss limits, drawdown
mechanics, consistency requirements and automation policy) and produces a
structured compliance report before a strategy is deployed.
"""

__version__ = "0.1.0"
__author__ = "PropFirm Rules Team"
