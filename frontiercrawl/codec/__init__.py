from .columns import REQUEST_ROW as REQUEST_ROW
from .columns import Column as Column
from .columns import RowDefinition as RowDefinition
from .row_codec import RequestRowCodec as RequestRowCodec
from .row_codec import decode_request as decode_request
from .row_codec import encode_request as encode_request

__all__ = ["REQUEST_ROW", "Column", "RowDefinition", "RequestRowCodec", "decode_request", "encode_request"]
