"""Rate limiting globale / Global rate limiter.

Usa slowapi per limitare le richieste per IP (login e chiamate AI).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
