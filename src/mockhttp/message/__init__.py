"""Request snapshot and response description."""

from .request import RequestMessage
from .response import ResponseMessage

__all__ = [
    "RequestMessage",
    "ResponseMessage",
]
