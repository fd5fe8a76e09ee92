"""Value types shared by the request and response models."""

from .headers import Headers
from .multivalue import MultiValueList
from .urls import UrlDetails, decode, parse_query, split_segments

__all__ = [
    "Headers",
    "MultiValueList",
    "UrlDetails",
    "decode",
    "parse_query",
    "split_segments",
]
