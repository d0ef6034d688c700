"""Public error envelope codec API."""

from . import wire
from .codec import (
    ErrorCodec,
    decode_error,
    dumps_error,
    encode_error,
    get_default_codec,
    loads_error,
)
from .decode import GENERIC_CAUSE_TAG, ErrorDecoder
from .encode import ErrorEncoder, external_type_name
from .envelope import EnvelopeFields, read_envelope
from .exceptions import (
    ChainTooDeepError,
    DecodeConstructionError,
    DecodeStage,
    ErrorCodecError,
    MalformedInputError,
    MissingDiscriminatorError,
    RegistryError,
    UnknownErrorTypeError,
)
from .registry import (
    DEFAULT_REGISTRY,
    ErrorKindEntry,
    ErrorRegistry,
    build_default_registry,
    builtin_entries,
)

__all__ = [
    "DEFAULT_REGISTRY",
    "GENERIC_CAUSE_TAG",
    "ChainTooDeepError",
    "DecodeConstructionError",
    "DecodeStage",
    "EnvelopeFields",
    "ErrorCodec",
    "ErrorCodecError",
    "ErrorDecoder",
    "ErrorEncoder",
    "ErrorKindEntry",
    "ErrorRegistry",
    "MalformedInputError",
    "MissingDiscriminatorError",
    "RegistryError",
    "UnknownErrorTypeError",
    "build_default_registry",
    "builtin_entries",
    "decode_error",
    "dumps_error",
    "encode_error",
    "external_type_name",
    "get_default_codec",
    "loads_error",
    "read_envelope",
    "wire",
]
