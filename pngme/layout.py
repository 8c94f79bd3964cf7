"""
PNGME Byte Layout

Where each structural piece of a serialized PNG sits: the signature and
every chunk, as absolute byte ranges.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StructuredRange:
    """A region of bytes claimed by one structural field.

    Represents the mapping: bytes[start:end] → field_id.
    """
    start: int
    end: int
    field_id: str
    description: str = ""

    @property
    def length(self) -> int:
        return self.end - self.start

    def __repr__(self) -> str:
        desc = f" ({self.description})" if self.description else ""
        return f"<{self.field_id} [{self.start:#x}:{self.end:#x}]{desc}>"
