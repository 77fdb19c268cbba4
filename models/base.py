import uuid

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def generate_uuid() -> str:
    """Primary keys are UUID strings, matching the ids the clients send."""
    return str(uuid.uuid4())
