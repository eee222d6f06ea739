"""Generazione identificativi / Identifier generation."""

import uuid


def new_id(prefix: str | None = None) -> str:
    """Nuovo id stringa, con prefisso opzionale (es. CNT-…) / New string id, optional prefix (e.g. CNT-…)."""
    code = uuid.uuid4().hex[:10].upper()
    return f"{prefix}-{code}" if prefix else code.lower()
