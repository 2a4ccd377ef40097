from dentaltrack.database.base_class import Base
from dentaltrack.database.session import SessionLocal, engine, get_db, db_session

__all__ = ["Base", "SessionLocal", "engine", "get_db", "db_session"]
