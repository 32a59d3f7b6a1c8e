from managed_exceptions.error_details import ErrorDetails

class ManagedException(Exception):
    """
    An error that already knows how it is reported: the HTTP status, the
    diagnostic code and the details rendered in the error response body.
    """

    def __init__(self, error: ErrorDetails):
        self.error_details = error
        self.status_code = error.status_code
        self.diagnostic_code = error.diagnostic_code
        self.diagnostic_details = error.diagnostic_details
        super().__init__(error.message)

    def summary(self) -> str:
        return self.error_details.summary()
