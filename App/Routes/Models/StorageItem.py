from datetime import datetime, timezone

from .Database import db


def _utcnow():
    return datetime.now(timezone.utc)


class StorageItem(db.Model):
    """One key/value pair of a client's local storage."""

    __tablename__ = 'storage_items'

    id = db.Column(db.Integer, primary_key=True)
    namespace = db.Column(db.String(64), nullable=False, index=True)
    key = db.Column(db.String(255), nullable=False)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (db.UniqueConstraint('namespace', 'key', name='unique_namespace_key'),)

    def __repr__(self):
        return f'<StorageItem namespace={self.namespace} key={self.key}>'
