"""End-to-end tests for the error codec facade."""

from __future__ import annotations

import json
from typing import Iterator

import pytest

from packages.service_errors import (
    AccessDeniedError,
    AuthenticationError,
    ConcurrencyError,
    ConfigurationError,
    DuplicateEntityError,
    EntityNotFoundError,
    ErrorCodec,
    MalformedInputError,
    OpaqueError,
    SecurityError,
    ServiceError,
    decode_error,
    dumps_error,
    encode_error,
    loads_error,
)
from packages.service_errors.codec import get_default_codec

_ALL_KINDS = [
    ServiceError("payment gateway rejected request", error_code="GATEWAY_REJECTED"),
    SecurityError(),
    AuthenticationError("token expired"),
    AccessDeniedError(required_permission="orders:refund"),
    ConcurrencyError("order was modified", entity={"id": 7, "version": [3, 4]}),
    ConfigurationError(configuration_key="payments.api_key", error_code="MISSING_KEY"),
    DuplicateEntityError("customer email already registered"),
    EntityNotFoundError(entity_name="Invoice"),
]


@pytest.fixture
def default_codec_reset() -> Iterator[None]:
    """Clear the cached default codec around a test."""
    get_default_codec.cache_clear()
    yield
    get_default_codec.cache_clear()


@pytest.mark.parametrize("error", _ALL_KINDS, ids=lambda error: type(error).__name__)
def test_round_trip_preserves_every_kind(error: ServiceError) -> None:
    """decode(encode(error)) should reproduce an equal error."""
    codec = ErrorCodec()

    decoded = codec.decode(codec.encode(error))

    assert decoded == error
    assert type(decoded) is type(error)
    assert decoded.message == error.message
    assert decoded.error_code == error.error_code
    assert dict(decoded.payload()) == dict(error.payload())


def test_round_trip_preserves_cause_chain_length() -> None:
    """Every link of a mixed cause chain should survive a round trip."""
    chain: ServiceError = ConfigurationError(configuration_key="db.url")
    chain = ServiceError("repository unavailable", cause=chain, error_code="REPO_DOWN")
    chain = EntityNotFoundError(entity_name="Order", cause=chain)
    chain = AccessDeniedError(required_permission="orders:read", cause=chain)
    chain = AuthenticationError(cause=chain)
    codec = ErrorCodec()

    decoded = codec.decode(codec.encode(chain))

    original_links: list[BaseException] = []
    decoded_links: list[BaseException] = []
    cursor: BaseException | None = chain
    while cursor is not None:
        original_links.append(cursor)
        cursor = getattr(cursor, "cause", None)
    cursor = decoded
    while cursor is not None:
        decoded_links.append(cursor)
        cursor = getattr(cursor, "cause", None)

    assert len(decoded_links) == len(original_links) == 5
    for original, restored in zip(original_links, decoded_links):
        assert type(restored) is type(original)
        assert restored.message == original.message  # type: ignore[attr-defined]
        assert restored.error_code == original.error_code  # type: ignore[attr-defined]
    assert decoded == chain


def test_round_trip_turns_foreign_cause_into_opaque_error() -> None:
    """Non-taxonomy causes come back as OpaqueError with message and tag."""
    codec = ErrorCodec()
    error = ServiceError("wrapped", cause=KeyError("order-12"))

    decoded = codec.decode(codec.encode(error))

    assert decoded.cause == OpaqueError("'order-12'", type_name="builtins.KeyError")


def test_opaque_cause_round_trips_unchanged() -> None:
    """An opaque cause should survive repeated round trips."""
    codec = ErrorCodec()
    error = ServiceError(
        "wrapped", cause=OpaqueError("disk full", type_name="vendor.StorageError")
    )

    once = codec.decode(codec.encode(error))
    twice = codec.decode(codec.encode(once))

    assert once == error
    assert twice == error


def test_entity_not_found_example_round_trips_through_json() -> None:
    """The EntityNotFound example should survive JSON text serialization."""
    codec = ErrorCodec()
    error = EntityNotFoundError(entity_name="Order")

    raw = codec.dumps(error)

    assert json.loads(raw) == {
        "type": "service_errors.EntityNotFoundError",
        "message": "No `Order` entity matching the given parameters could be found.",
        "errorCode": "NOT_FOUND",
        "entityName": "Order",
    }
    assert codec.loads(raw) == error
    assert codec.loads(raw.encode("utf-8")) == error


@pytest.mark.parametrize("raw", ["{not json", "", b"\xff\xfe"])
def test_loads_rejects_invalid_json(raw: str | bytes) -> None:
    """Unparseable text is malformed input."""
    with pytest.raises(MalformedInputError) as exc_info:
        ErrorCodec().loads(raw)

    assert exc_info.value.path == "$"


def test_loads_rejects_nesting_beyond_parser_recursion_limit() -> None:
    """Pathologically nested text is malformed input, not a RecursionError."""
    depth = 200_000
    raw = '{"type":"service_errors.ServiceError","cause":' * depth + "{}" + "}" * depth

    with pytest.raises(MalformedInputError) as exc_info:
        ErrorCodec().loads(raw)

    assert exc_info.value.path == "$"
    assert isinstance(exc_info.value.__cause__, RecursionError)


def test_loads_rejects_json_that_is_not_an_object() -> None:
    """Valid JSON that is not an object is malformed input."""
    with pytest.raises(MalformedInputError):
        ErrorCodec().loads("[1, 2, 3]")


def test_module_helpers_use_default_codec(default_codec_reset: None) -> None:
    """Module-level helpers should round-trip through the default codec."""
    error = ConfigurationError(configuration_key="cache.ttl")

    assert decode_error(encode_error(error)) == error
    assert loads_error(dumps_error(error)) == error


def test_default_codec_reads_depth_limit_from_environment(
    default_codec_reset: None,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """The default codec should be configured from loaded settings."""
    monkeypatch.setenv("SERVICE_ERRORS_CODEC__MAX_CAUSE_DEPTH", "1")
    monkeypatch.setenv("SERVICE_ERRORS_CODEC__DEPTH_POLICY", "truncate")

    codec = get_default_codec()
    decoded = decode_error(
        encode_error(ServiceError("a", cause=ServiceError("b", cause=ServiceError("c"))))
    )

    assert codec.settings.max_cause_depth == 1
    assert decoded.cause is not None
    assert decoded.cause.cause is None
