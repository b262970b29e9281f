"""
One-shot StarkNet scripts: declare, deploy, approve and multisend through a single
signing account.
"""

__version__ = "0.1.0"
