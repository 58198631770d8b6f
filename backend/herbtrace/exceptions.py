"""Domain errors raised by the geofencing core and the collaborator ledgers.

Every error is a synchronous rejection: the operation that raised it has
made no state change. The ``code`` is stable and rendered on the wire.
"""


class LedgerError(Exception):
    """Base class for all rejections."""

    code = "ledger_error"
    status_code = 400

    def __init__(self, message: str | None = None):
        super().__init__(message or self.code)
        self.message = message or self.code


class Unauthorized(LedgerError):
    """Caller is not the identity allowed to perform the mutation."""

    code = "unauthorized"
    status_code = 403


class InvalidCoordinates(LedgerError):
    """Bounding box does not satisfy min < max on both axes."""

    code = "invalid_coordinates"
    status_code = 400


class InvalidZoneId(LedgerError):
    """Zone id is zero or beyond the highest assigned id."""

    code = "invalid_zone_id"
    status_code = 404


class EmptyHerbName(LedgerError):
    code = "empty_herb_name"
    status_code = 400


class LocationOutOfBounds(LedgerError):
    """Point is not covered by any active zone."""

    code = "location_out_of_bounds"
    status_code = 422


class IndexOutOfBounds(LedgerError):
    code = "index_out_of_bounds"
    status_code = 404


class AlreadyExists(LedgerError):
    code = "already_exists"
    status_code = 409


class InvalidAddress(LedgerError):
    """Identity is missing, blank or the zero address."""

    code = "invalid_address"
    status_code = 400


class NotFound(LedgerError):
    code = "not_found"
    status_code = 404


class InvalidInput(LedgerError):
    code = "invalid_input"
    status_code = 400
