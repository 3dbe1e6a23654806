"""Translation of Supabase client failures into domain errors."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from supabase import AuthError, PostgrestAPIError

from campus_skill.domain.errors import BackendError


@contextmanager
def backend_errors() -> Iterator[None]:
    """Re-raise Supabase, auth and transport failures as BackendError."""
    try:
        yield
    except PostgrestAPIError as exc:
        raise BackendError(exc.message or str(exc)) from exc
    except AuthError as exc:
        raise BackendError(exc.message) from exc
    except httpx.HTTPError as exc:
        raise BackendError(str(exc) or exc.__class__.__name__) from exc
