from datetime import datetime
from src.extensions import db

class Record(db.Model):
    __tablename__ = "records"

    # Collection key (settings / products / customers / invoices / seeded)
    key = db.Column(db.String(100), primary_key=True)

    # JSON document held under the key
    value = db.Column(db.Text, nullable=False)

    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
