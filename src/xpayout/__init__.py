# src/xpayout/__init__.py
"""
XPayout - Cross-border Payout Comparison

Computes what a merchant actually receives in the settlement currency (INR)
for a foreign payment collected through a payment processor, and compares it
with a pass-through payout provider. Ships a Telegram bot front end.
"""

__version__ = "1.0.0"
