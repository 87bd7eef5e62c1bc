"""Errors raised by the reference store."""


class ReferenceStoreError(Exception):
    """A store operation failed; the message is safe to show to users."""


class ReferenceNotFoundError(ReferenceStoreError):
    """No reference matches the requested identifier."""

    def __init__(self, reference_id=None, message: str = "Referência não encontrada"):
        self.reference_id = reference_id
        super().__init__(message)
