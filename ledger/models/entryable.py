"""Entryable mixin for records carried on the ledger by an Entry row."""

from sqlmodel import Session, select

from ledger.models.entry import Entry


class Entryable:
    """Mixed into table models whose rows hang off an ``Entry``.

    The entry stores ``entryable_type`` (the class name) and ``entryable_id``
    so that one ``entry`` table can carry several record types.
    """

    @classmethod
    def entryable_type(cls) -> str:
        return cls.__name__

    def entry(self, session: Session) -> Entry | None:
        if self.id is None:
            return None
        return session.exec(
            select(Entry).where(
                Entry.entryable_type == self.entryable_type(),
                Entry.entryable_id == self.id,
            )
        ).first()
