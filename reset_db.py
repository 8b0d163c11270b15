# reset_db.py
from mirror_of_heart.models import database  # Make sure this imports your Base
from mirror_of_heart.models import *  # registers all models
from mirror_of_heart.models.database import engine

if __name__ == "__main__":
    print("⚠️ Dropping all existing tables...")
    database.Base.metadata.drop_all(bind=engine)

    print("✅ Recreating tables from models...")
    database.Base.metadata.create_all(bind=engine)

    print("✅ Database reset complete.")
