import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.extensions import db
from store.record import Record
from store.record_store import get_record_store
from store.seed import seed_demo_data

def create_tables(seed=True):
    db.drop_all()
    db.create_all()
    print("All tables created successfully")
    if seed and seed_demo_data(get_record_store()):
        print("Demo data loaded")

if __name__ == "__main__":
    from src.main import create_app
    app = create_app()
    with app.app_context():
        create_tables(seed="--no-seed" not in sys.argv)
