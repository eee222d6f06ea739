"""
Parsing difensivo delle risposte del modello / Defensive parsing of model responses.

Il servizio puo restituire JSON racchiuso in blocchi Markdown o testo libero:
ogni risposta passa da clean_json() e viene validata con un TypeAdapter.
The service may return fenced JSON or free text: every response goes through
clean_json() and is validated with a TypeAdapter.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

T = TypeVar("T")

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def clean_json(text: str | None) -> str:
    """Rimuove i delimitatori ``` / Strip ``` fences."""
    if not text:
        return "{}"
    return _FENCE_RE.sub("", text).strip()


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Esito tipizzato del parsing / Tagged parse outcome."""
    ok: bool
    value: T | None = None
    error: str | None = None

    def unwrap_or(self, default: T) -> T:
        return self.value if self.ok else default


def parse_json(text: str | None, type_: Any) -> ParseResult:
    """Testo grezzo -> valore validato o errore strutturato, senza eccezioni.

    Raw text -> validated value or structured error, never raises.
    """
    raw = clean_json(text)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        return ParseResult(ok=False, error=f"invalid JSON: {e.msg} at position {e.pos}")
    try:
        return ParseResult(ok=True, value=TypeAdapter(type_).validate_python(data))
    except ValidationError as e:
        return ParseResult(ok=False, error=f"unexpected shape: {e.error_count()} validation error(s)")
