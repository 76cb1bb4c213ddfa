"""Saving and restoring parameter state as XML wrapped in a binary block."""

from __future__ import annotations

import re
import struct
import xml.etree.ElementTree as ET
from typing import Dict, Mapping, Optional, Union

from .params import Band

STATE_TAG = "EQIsolator4Parameters"
XML_MAGIC = 0x21324356
_HEADER = struct.Struct("<II")
_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

StateValues = Dict[str, Union[float, bool]]


def _format_value(value: Union[float, bool]) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return repr(float(value))


def _parse_float(text: str) -> float:
    match = _LEADING_NUMBER.match(text)
    return float(match.group(1)) if match else 0.0


def _parse_bool(text: str) -> bool:
    match = _LEADING_INT.match(text)
    if match and int(match.group(1)) != 0:
        return True
    return text.strip().lower() in ("true", "yes")


def state_to_xml(values: Mapping[str, Union[float, bool]]) -> str:
    """Serialise parameter values as a single-line XML document."""
    element = ET.Element(STATE_TAG)
    for parameter_id, value in values.items():
        element.set(parameter_id, _format_value(value))
    return f"{_XML_DECLARATION} {ET.tostring(element, encoding='unicode')}"


def state_from_xml(text: str) -> StateValues:
    """Read the known gain and bypass values present in an XML state document.

    Raises ValueError if the text is not well-formed XML.
    """
    try:
        element = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ValueError(f"malformed state XML: {exc}") from None
    values: StateValues = {}
    for band in Band:
        gain_text = element.get(band.gain_id)
        if gain_text is not None:
            values[band.gain_id] = _parse_float(gain_text)
    for band in Band:
        bypass_text = element.get(band.bypass_id)
        if bypass_text is not None:
            values[band.bypass_id] = _parse_bool(bypass_text)
    return values


def copy_xml_to_binary(xml_text: str) -> bytes:
    """Wrap XML text in a block: magic number, length, UTF-8 text, terminating zero."""
    encoded = xml_text.encode("utf-8")
    return _HEADER.pack(XML_MAGIC, len(encoded)) + encoded + b"\x00"


def get_xml_from_binary(data: bytes) -> Optional[str]:
    """Extract the XML text from a block, or None if the block does not hold one."""
    data = bytes(data)
    if len(data) <= _HEADER.size:
        return None
    magic, length = _HEADER.unpack_from(data)
    if magic != XML_MAGIC or length <= 0 or length >= 0x80000000:
        return None
    payload = data[_HEADER.size : _HEADER.size + min(len(data) - _HEADER.size, length)]
    return payload.decode("utf-8", errors="replace").rstrip("\x00")