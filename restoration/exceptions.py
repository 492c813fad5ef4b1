"""
Errors raised by the polygon validation engine.

Each error carries an HTTP-like status_code so transports and the
delayed job worker can report it without inspecting the type.
"""


class ValidationEngineException(Exception):
    """Base class for validation engine errors."""

    status_code = 500

    def __init__(self, message=None):
        self.message = message or self.__class__.__doc__ or self.__class__.__name__
        super().__init__(self.message)


class UnknownValidationType(ValidationEngineException):
    """Validation type has no registered criteria or no implementation."""

    status_code = 400

    def __init__(self, validation_type):
        self.validation_type = validation_type
        super().__init__(f"Unknown validation type: {validation_type}")


class UnsupportedGeometryValidation(ValidationEngineException):
    """Validation type needs stored polygons and cannot check raw geometries."""

    status_code = 400

    def __init__(self, validation_type):
        self.validation_type = validation_type
        super().__init__(f"Validation type {validation_type} cannot run on unsaved geometries")


class InvalidGeometry(ValidationEngineException):
    """Submitted GeoJSON is malformed or not a polygon."""

    status_code = 400


class PolygonNotFound(ValidationEngineException):
    """Polygon does not exist."""

    status_code = 404

    def __init__(self, polygon_uuid):
        self.polygon_uuid = polygon_uuid
        super().__init__(f"Polygon with UUID {polygon_uuid} not found")


class SiteNotFound(ValidationEngineException):
    """Site does not exist."""

    status_code = 404

    def __init__(self, site_uuid):
        self.site_uuid = site_uuid
        super().__init__(f"Site with UUID {site_uuid} not found")


class InvalidPageSize(ValidationEngineException):
    status_code = 400

    def __init__(self, page_size, max_page_size):
        self.page_size = page_size
        super().__init__(f"Page size must be between 1 and {max_page_size}, got {page_size}")


class InvalidPageNumber(ValidationEngineException):
    status_code = 400

    def __init__(self, page_number):
        self.page_number = page_number
        super().__init__(f"Page number must be at least 1, got {page_number}")


class ValidatorExecutionFailure(ValidationEngineException):
    """Geometry or data access failed while running a validator."""

    status_code = 500


class JobNotFound(ValidationEngineException):
    """Delayed job does not exist."""

    status_code = 404

    def __init__(self, job_id):
        self.job_id = job_id
        super().__init__(f"Delayed job {job_id} not found")
