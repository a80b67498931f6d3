"""Domain exceptions raised by the invoice core"""

from typing import Dict


class BillEditError(ValueError):
    """An edit to a bill draft was rejected (e.g. removing the only item)"""


class BillValidationError(ValueError):
    """
    A bill failed its pre-save checks

    Attributes:
        errors: Field name -> human readable message
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {message}" for field, message in self.errors.items()))
