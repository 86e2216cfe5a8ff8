from __future__ import annotations


class RecordNotFoundError(LookupError):
    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class RecordAccessError(PermissionError):
    """The record exists but belongs to another user."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"Unauthorized to modify {kind} {record_id}")
        self.kind = kind
        self.record_id = record_id


__all__ = ["RecordAccessError", "RecordNotFoundError"]
