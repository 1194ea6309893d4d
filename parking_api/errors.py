# parking_api/errors.py
"""
Typed failures raised by services before any state is touched.
main.py renders every ParkingError into the standard response envelope.
"""


class ParkingError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(ParkingError):
    status_code = 400
    default_message = "Bad request"


class NoCapacity(ParkingError):
    status_code = 400
    default_message = "No available spaces"


class Unauthorized(ParkingError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(ParkingError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(ParkingError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(ParkingError):
    status_code = 409
    default_message = "Conflict"
