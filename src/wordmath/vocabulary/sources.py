"""
Vocabulary sources - resolve a source reference to raw word/vector rows.

A source reference is opaque to the engine. Supported forms:
- Mapping of word -> sequence of numbers (already parsed)
- Local file path (str or Path), JSON object or GloVe-style text
- http(s) URL, fetched with requests
- bytes / bytearray buffer
- File-like object with a read() method

Rows are yielded in source order; validation and normalization happen in
VocabularyStore.
"""

import json
import logging
import time
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple

import requests

from ..core.exceptions import LoadError


logger = logging.getLogger(__name__)

RawRow = Tuple[Any, Any]

JSON_SUFFIXES = (".json",)
TEXT_SUFFIXES = (".txt", ".vec", ".glove")

DEFAULT_TIMEOUT = 30
DEFAULT_MAX_RETRIES = 3
USER_AGENT = "WordMath/0.1"


def describe_source(source: Any) -> str:
    """Return a short human-readable label for a source reference."""
    if isinstance(source, Path):
        return str(source)
    if isinstance(source, str):
        return source
    if isinstance(source, (bytes, bytearray)):
        return f"<buffer {len(source)} bytes>"
    if isinstance(source, Mapping):
        return f"<mapping {len(source)} entries>"
    name = getattr(source, "name", None)
    if isinstance(name, str):
        return name
    return f"<{type(source).__name__}>"


def is_url(source: Any) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def _format_from_name(name: str) -> Optional[str]:
    lowered = name.lower().split("?", 1)[0]
    if lowered.endswith(JSON_SUFFIXES):
        return "json"
    if lowered.endswith(TEXT_SUFFIXES):
        return "text"
    return None


def sniff_format(text: str) -> str:
    """Guess the table format from content: a leading '{' means JSON."""
    stripped = text.lstrip()
    if stripped.startswith("{"):
        return "json"
    return "text"


def parse_json_table(text: str, source_ref: str) -> Iterator[RawRow]:
    """
    Parse a JSON object of word -> vector.
    
    Raises:
        LoadError: If the text is not valid JSON or not a JSON object
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        # JSONDecodeError, or an integer literal past the interpreter digit limit
        raise LoadError(f"Invalid JSON in vocabulary source: {e}", source_ref) from e
    
    if not isinstance(data, dict):
        raise LoadError(
            f"Vocabulary JSON must be an object, got {type(data).__name__}",
            source_ref,
        )
    
    return iter(data.items())


def parse_text_table(lines: Iterable[str]) -> Iterator[RawRow]:
    """
    Parse GloVe-style text: one 'word v1 v2 ... vN' entry per line.
    
    A word2vec-style header line ('<count> <dims>') on the first non-empty
    line is skipped. Values are yielded as strings; conversion happens at
    ingestion so that a bad number only drops its own row.
    """
    first = True
    for line in lines:
        parts = line.split()
        if not parts:
            continue
        if first:
            first = False
            if len(parts) == 2 and parts[0].isdigit() and parts[1].isdigit():
                logger.debug(f"Skipping header line: {line.strip()}")
                continue
        yield parts[0], parts[1:]


def parse_table(text: str, source_ref: str, fmt: Optional[str] = None) -> Iterator[RawRow]:
    """Parse table text in the given (or sniffed) format."""
    fmt = fmt or sniff_format(text)
    if fmt == "json":
        return parse_json_table(text, source_ref)
    return parse_text_table(text.splitlines())


def fetch_url(
    url: str,
    timeout: int = DEFAULT_TIMEOUT,
    max_retries: int = DEFAULT_MAX_RETRIES,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Fetch a vocabulary document over HTTP.
    
    Transport errors and 5xx responses are retried with exponential backoff;
    4xx responses fail immediately.
    
    Args:
        url: http(s) URL
        timeout: Request timeout in seconds
        max_retries: Maximum attempts
        session: Optional requests session (a new one is opened and closed
            around the request otherwise)
        
    Returns:
        Response body as text
        
    Raises:
        LoadError: If the document could not be retrieved
    """
    if session is None:
        with requests.Session() as owned_session:
            return fetch_url(url, timeout=timeout, max_retries=max_retries, session=owned_session)
    
    headers = {"User-Agent": USER_AGENT}
    
    last_error = None
    for attempt in range(max_retries):
        try:
            response = session.get(url, headers=headers, timeout=timeout)
        except requests.exceptions.RequestException as e:
            last_error = str(e)
            logger.warning(
                f"Vocabulary fetch failed (attempt {attempt + 1}/{max_retries}): {e}"
            )
        else:
            if response.status_code < 400:
                return response.text
            last_error = f"HTTP {response.status_code}"
            if response.status_code < 500:
                break
            logger.warning(
                f"Vocabulary fetch returned {response.status_code} "
                f"(attempt {attempt + 1}/{max_retries})"
            )
        
        if attempt < max_retries - 1:
            time.sleep(2 ** attempt)
    
    raise LoadError(f"Failed to fetch vocabulary from {url}: {last_error}", url)


def read_rows(
    source: Any,
    fmt: Optional[str] = None,
    timeout: int = DEFAULT_TIMEOUT,
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> Iterator[RawRow]:
    """
    Resolve a source reference to raw (word, values) rows.
    
    Args:
        source: Mapping, path, URL, bytes buffer or file-like object
        fmt: Force 'json' or 'text'; detected from name or content otherwise
        timeout: HTTP timeout for URL sources
        max_retries: HTTP attempts for URL sources
        
    Raises:
        LoadError: If the source cannot be retrieved or is not well-formed
    """
    source_ref = describe_source(source)
    
    if isinstance(source, Mapping):
        return iter(source.items())
    
    if is_url(source):
        text = fetch_url(source, timeout=timeout, max_retries=max_retries)
        return parse_table(text, source_ref, fmt or _format_from_name(source))
    
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.is_file():
            raise LoadError(f"Vocabulary file not found: {path}", source_ref)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(f"Could not read vocabulary file {path}: {e}", source_ref) from e
        return parse_table(text, source_ref, fmt or _format_from_name(path.name))
    
    if isinstance(source, (bytes, bytearray)):
        try:
            text = bytes(source).decode("utf-8")
        except UnicodeDecodeError as e:
            raise LoadError(f"Vocabulary buffer is not UTF-8: {e}", source_ref) from e
        return parse_table(text, source_ref, fmt)
    
    if hasattr(source, "read"):
        try:
            content = source.read()
        except OSError as e:
            raise LoadError(f"Could not read vocabulary stream: {e}", source_ref) from e
        if isinstance(content, bytes):
            try:
                content = content.decode("utf-8")
            except UnicodeDecodeError as e:
                raise LoadError(f"Vocabulary stream is not UTF-8: {e}", source_ref) from e
        return parse_table(content, source_ref, fmt)
    
    raise LoadError(f"Unsupported vocabulary source type: {type(source).__name__}", source_ref)
