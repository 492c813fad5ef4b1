from .timestampedmodel import TimeStampedModel
from .softdeletablemodel import SoftDeletableModel
from .basemodel import BaseModel
from .project import Project
from .site import Site
from .polygon_geometry import PolygonGeometry
from .site_polygon import SitePolygon
from .criteria import CriteriaSite, CriteriaSiteHistoric
from .delayed_job import DelayedJob
