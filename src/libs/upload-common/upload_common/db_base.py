# src/libs/upload-common/upload_common/db_base.py
from sqlalchemy.orm import declarative_base

# Shared declarative base for every upload_common model.
Base = declarative_base()
