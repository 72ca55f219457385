"""
Pydantic request models for the sample endpoints.
"""

from .base import BaseBodyModel, BaseParamsModel
from .items import CreateItemBody, ItemParams, ListItemsQuery

__all__ = [
    'BaseBodyModel',
    'BaseParamsModel',
    'CreateItemBody',
    'ItemParams',
    'ListItemsQuery',
]
