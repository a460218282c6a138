#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2gemini/utils/encoding.py
"""Character encoding detection and handling for HTML input.

This module turns raw HTML bytes into text. Byte-order marks win, then a
``<meta charset>`` declaration near the top of the document, then chardet
based detection when chardet is installed, then a list of fallback
encodings.
"""

from __future__ import annotations

import codecs
import logging
import re
from typing import IO

from html2gemini.constants import (
    BYTE_ORDER_MARKS,
    CHARDET_CONFIDENCE_THRESHOLD,
    CHARDET_SAMPLE_SIZE,
    DEFAULT_FALLBACK_ENCODINGS,
    META_CHARSET_SNIFF_BYTES,
)
from html2gemini.exceptions import DecodingError

logger = logging.getLogger(__name__)

_META_CHARSET_RE = re.compile(rb"""<meta[^>]+charset\s*=\s*["']?\s*([A-Za-z0-9_.:-]+)""", re.IGNORECASE)


def strip_bom(data: bytes) -> tuple[bytes, str | None]:
    """Remove a leading byte-order mark.

    Parameters
    ----------
    data : bytes
        Raw input bytes

    Returns
    -------
    tuple[bytes, str | None]
        The bytes without the mark, and the encoding the mark implies
        (None when there is no mark)

    Examples
    --------
    >>> strip_bom(b"\\xef\\xbb\\xbf<p>x</p>")
    (b'<p>x</p>', 'utf-8')

    """
    for mark, encoding in BYTE_ORDER_MARKS:
        if data.startswith(mark):
            return data[len(mark) :], encoding
    return data, None


def strip_text_bom(text: str) -> str:
    """Remove a leading U+FEFF from already-decoded text."""
    return text[1:] if text.startswith("\ufeff") else text


def sniff_meta_charset(data: bytes, sniff_bytes: int = META_CHARSET_SNIFF_BYTES) -> str | None:
    """Return the charset declared by a ``<meta>`` tag near the start of ``data``.

    Unknown charset names are ignored.
    """
    match = _META_CHARSET_RE.search(data[:sniff_bytes])
    if not match:
        return None

    charset = match.group(1).decode("ascii", errors="ignore")
    try:
        return codecs.lookup(charset).name
    except LookupError:
        logger.debug(f"Ignoring unknown meta charset: {charset}")
        return None


def detect_encoding(
    data: bytes,
    sample_size: int = CHARDET_SAMPLE_SIZE,
    confidence_threshold: float = CHARDET_CONFIDENCE_THRESHOLD,
) -> str | None:
    """Detect character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of bytes to sample for detection (uses first N bytes)
    confidence_threshold : float, default 0.7
        Minimum confidence level (0.0-1.0) required to trust detection

    Returns
    -------
    str | None
        Detected encoding name, or None if chardet is not installed,
        detection fails or the confidence is below the threshold

    """
    try:
        import chardet
    except ImportError:
        logger.debug("chardet not available for encoding detection")
        return None

    result = chardet.detect(data[:sample_size])
    if not result or not result.get("encoding"):
        logger.debug("chardet: No encoding detected")
        return None

    encoding = result["encoding"]
    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")

    if confidence >= confidence_threshold:
        return encoding
    logger.debug(f"chardet confidence {confidence:.2f} below threshold {confidence_threshold}")
    return None


def decode_html_bytes(
    data: bytes,
    fallback_encodings: tuple[str, ...] | list[str] | None = None,
    use_chardet: bool = True,
) -> str:
    """Decode raw HTML bytes to text.

    Parameters
    ----------
    data : bytes
        Raw HTML bytes, possibly starting with a byte-order mark
    fallback_encodings : sequence of str, optional
        Encodings tried in order when no BOM, meta charset or confident
        chardet guess decodes the input. Defaults to utf-8, cp1252, latin-1.
    use_chardet : bool, default True
        Whether to consult chardet (when installed)

    Returns
    -------
    str
        Decoded text without any byte-order mark

    Raises
    ------
    DecodingError
        If the input carries a byte-order mark but is not valid in the
        encoding the mark declares

    """
    data, bom_encoding = strip_bom(data)
    if bom_encoding:
        try:
            text = data.decode(bom_encoding)
        except UnicodeDecodeError as e:
            raise DecodingError(
                f"Input starts with a {bom_encoding} byte-order mark but is not valid {bom_encoding}",
                encoding=bom_encoding,
                original_error=e,
            ) from e
        logger.debug(f"Decoded input using byte-order mark encoding: {bom_encoding}")
        return text

    candidates: list[str] = []
    meta_charset = sniff_meta_charset(data)
    if meta_charset:
        candidates.append(meta_charset)
    if use_chardet:
        detected = detect_encoding(data)
        if detected:
            candidates.append(detected)
    candidates.extend(DEFAULT_FALLBACK_ENCODINGS if fallback_encodings is None else fallback_encodings)

    for encoding in candidates:
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with {encoding}: {e}")
            continue
        logger.debug(f"Successfully decoded with encoding: {encoding}")
        return strip_text_bom(text)

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")


def normalize_stream_to_text(stream: IO[bytes] | IO[str], use_chardet: bool = True) -> str:
    """Read a binary or text stream and return its content as text.

    Binary streams are decoded with :func:`decode_html_bytes`; text streams
    only have a leading BOM character removed.

    Raises
    ------
    DecodingError
        If the stream yields something other than bytes or str, or the bytes
        cannot be decoded

    """
    content = stream.read()

    if isinstance(content, bytes):
        return decode_html_bytes(content, use_chardet=use_chardet)
    elif isinstance(content, str):
        return strip_text_bom(content)
    else:
        raise DecodingError(
            f"Stream read() returned unexpected type {type(content).__name__}. Expected bytes or str."
        )
