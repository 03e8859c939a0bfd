"""
walletbook - Source Package

A personal finance ledger: income/expense transactions recorded against
named wallets, categorized, and summarized over selectable time windows.

DESIGN PRINCIPLES:
1. Wallet balances always follow the ledger
2. Refusals are returned, not raised
3. Every mutation is auditable
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "walletbook Team"
