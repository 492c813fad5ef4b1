import uuid

from restoration.models.timestampedmodel import TimeStampedModel
from restoration.models.softdeletablemodel import SoftDeletableModel


def generate_uuid():
    return str(uuid.uuid4())


class BaseModel(TimeStampedModel, SoftDeletableModel):
    class Meta:
        abstract = True
