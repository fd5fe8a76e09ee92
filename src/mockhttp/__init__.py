"""Framework-agnostic HTTP message model for mock servers."""

from .util.multivalue import MultiValueList
from .util.headers import Headers
from .util.urls import UrlDetails
from .body.data import Body, BodyData, BodyType, BytesBody, FileBody, JsonBody, TextBody
from .body.parser import detect_body_type_from_content_type, parse_body
from .message.request import RequestMessage
from .message.response import ResponseMessage
from .handlers.filesystem import FileSystemHandler, LocalFileSystemHandler
from .http.channel import BufferedResponseChannel, ResponseChannel
from .http.mapper import MaterializedResponse, ResponseMapper
from .http.server import ConnectionHandler
from .exceptions import (
    BadRequestError,
    BodyFileError,
    BodyFileNotFoundError,
    BodyFileReadError,
    InvalidHeaderError,
    MockHttpError,
    PayloadTooLargeError,
)

__all__ = [
    # Value types
    "MultiValueList",
    "Headers",
    "UrlDetails",
    # Bodies
    "Body",
    "BodyData",
    "BodyType",
    "BytesBody",
    "FileBody",
    "JsonBody",
    "TextBody",
    "detect_body_type_from_content_type",
    "parse_body",
    # Messages
    "RequestMessage",
    "ResponseMessage",
    # Response writing
    "FileSystemHandler",
    "LocalFileSystemHandler",
    "ResponseChannel",
    "BufferedResponseChannel",
    "MaterializedResponse",
    "ResponseMapper",
    "ConnectionHandler",
    # Errors
    "MockHttpError",
    "BodyFileError",
    "BodyFileNotFoundError",
    "BodyFileReadError",
    "InvalidHeaderError",
    "BadRequestError",
    "PayloadTooLargeError",
]
