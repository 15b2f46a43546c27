"""
Resources for the MoMo SDK.
"""
from .base import ProductResource, format_amount
from .collection import CollectionResource
from .disbursement import DisbursementResource

__all__ = [
    "ProductResource",
    "format_amount",
    "CollectionResource",
    "DisbursementResource",
]
