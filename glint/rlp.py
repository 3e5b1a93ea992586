"""RLP header decoding and extraction of raw content slices for hashing."""

from __future__ import annotations

from dataclasses import dataclass, field

_EMPTY_STRING_CODE = 0x80
_EMPTY_LIST_CODE = 0xC0
_SHORT_STRING_MAX = 0xB7
_LONG_STRING_MAX = 0xBF
_SHORT_LIST_MAX = 0xF7


class RlpError(ValueError):
    """Raised on malformed or non-canonical RLP input."""


@dataclass(frozen=True)
class RlpHeader:
    """The kind and payload length of one RLP item."""

    is_list: bool
    payload_length: int


@dataclass(frozen=True)
class RawContentSlices:
    """The encoded fields of a create or update that feed its content hash."""

    content_type_rlp: bytes
    payload_rlp: bytes
    string_annotations_rlp: bytes
    numeric_annotations_rlp: bytes


@dataclass
class DecodedSlices:
    """Raw content slices for every create and update in a transaction."""

    create_slices: list[RawContentSlices] = field(default_factory=list)
    update_slices: list[RawContentSlices] = field(default_factory=list)


def _byte_at(data: bytes, offset: int) -> int:
    if offset >= len(data):
        raise RlpError("input too short")
    return data[offset]


def decode_header(data: bytes, offset: int = 0) -> tuple[RlpHeader, int]:
    """Decode the header at ``offset``; return it and the offset of its payload.

    A single byte below 0x80 is its own payload, so the offset does not move.
    """
    first = _byte_at(data, offset)
    is_list = False
    if first < _EMPTY_STRING_CODE:
        payload_length = 1
    elif first <= _SHORT_STRING_MAX:
        offset += 1
        payload_length = first - _EMPTY_STRING_CODE
        if payload_length == 1 and _byte_at(data, offset) < _EMPTY_STRING_CODE:
            raise RlpError("non-canonical single byte")
    elif first <= _LONG_STRING_MAX or first > _SHORT_LIST_MAX:
        offset += 1
        is_list = first > _SHORT_LIST_MAX
        len_of_len = first - (_SHORT_LIST_MAX if is_list else _SHORT_STRING_MAX)
        if len_of_len > 8:
            raise RlpError("length overflow")
        if len(data) - offset < len_of_len:
            raise RlpError("input too short")
        length_bytes = data[offset : offset + len_of_len]
        if length_bytes[0] == 0:
            raise RlpError("leading zero in length")
        offset += len_of_len
        payload_length = int.from_bytes(length_bytes, "big")
        if payload_length < 56:
            raise RlpError("non-canonical size")
    else:
        offset += 1
        is_list = True
        payload_length = first - _EMPTY_LIST_CODE

    if len(data) - offset < payload_length:
        raise RlpError("input too short")
    return RlpHeader(is_list=is_list, payload_length=payload_length), offset


def skip_item(data: bytes, offset: int = 0) -> tuple[bytes, int]:
    """Return the full encoding of the item at ``offset`` and the offset after it."""
    header, payload_start = decode_header(data, offset)
    end = payload_start + header.payload_length
    return bytes(data[offset:end]), end


def _section_slices(
    data: bytes, offset: int, leading_fields: int
) -> tuple[list[RawContentSlices], int]:
    header, offset = decode_header(data, offset)
    slices: list[RawContentSlices] = []
    if not (header.is_list and header.payload_length > 0):
        return slices, offset
    section_end = offset + header.payload_length
    while offset < section_end:
        item_header, offset = decode_header(data, offset)
        item_end = offset + item_header.payload_length
        for _ in range(leading_fields):
            _, offset = skip_item(data, offset)
        content_type, offset = skip_item(data, offset)
        payload, offset = skip_item(data, offset)
        string_annotations, offset = skip_item(data, offset)
        numeric_annotations, offset = skip_item(data, offset)
        while offset < item_end:
            _, offset = skip_item(data, offset)
        slices.append(
            RawContentSlices(
                content_type_rlp=content_type,
                payload_rlp=payload,
                string_annotations_rlp=string_annotations,
                numeric_annotations_rlp=numeric_annotations,
            )
        )
    return slices, offset


def decode_raw_slices(calldata: bytes) -> DecodedSlices:
    """Extract raw RLP slices of creates and updates for deterministic hashing.

    Creates start with ``btl``; updates start with ``entity_key`` and ``btl``.
    Both then carry content type, payload, string and numeric annotations.
    Deletes and extends carry no content and are not inspected.
    """
    data = bytes(calldata)
    outer, offset = decode_header(data, 0)
    if not outer.is_list:
        raise RlpError("unexpected string, expected list")
    create_slices, offset = _section_slices(data, offset, leading_fields=1)
    update_slices, offset = _section_slices(data, offset, leading_fields=2)
    return DecodedSlices(create_slices=create_slices, update_slices=update_slices)