"""
Application errors raised below the web layer.

Routes translate these into HTTPException responses; search code never
lets them escape.
"""

from typing import Optional


class GenerationError(Exception):
    """Generative text call failed or returned nothing usable."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SourceError(Exception):
    """An upstream search source answered with something unusable."""

    def __init__(self, source: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{source}: {message}")
        self.source = source
        self.status_code = status_code
