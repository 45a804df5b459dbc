# intake/errors.py
# Store-level failures. Handlers in intake.main turn these into JSON responses.

class EnquiryNotFound(LookupError):
    """No enquiry with this id in the current partition."""
    def __init__(self, enquiry_id: str):
        super().__init__(enquiry_id)
        self.enquiry_id = enquiry_id


class StoreUnavailable(RuntimeError):
    """The backing store failed (connectivity, constraint violation, ...)."""
