"""
chainlog - an in-memory commit-chain ledger.
"""

from loguru import logger

__version__ = "0.1.0"
__logo__ = "⛓"

# Library logging stays quiet unless the CLI asks for it
logger.disable("chainlog")
