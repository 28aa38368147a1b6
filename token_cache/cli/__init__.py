"""CLI commands for the token cache.

Usage Examples:
    $ token-cache credentials status
    $ token-cache credentials key acct.example.com alice ID_TOKEN
"""

from token_cache.cli.credentials import credentials_group

__all__ = ["credentials_group"]
