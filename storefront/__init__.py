"""
Storefront core.

Catalog, accounts, identity tokens and checkout reconciliation. The HTTP
layer lives in the ``web`` package and only talks to the objects built by
``storefront.core.build_storefront``.
"""

__version__ = "1.0.0"
