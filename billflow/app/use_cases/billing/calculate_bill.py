"""Calculate Bill Use Case

Applies an optional edit to a draft and recomputes its derived fields
without saving anything.
"""

from libs.result import Result, Return, Error
from billflow.domain.bill_draft import BillDraft
from billflow.domain.exceptions import BillEditError
from .dtos import BillEditDTO, CalculateBillCommandDTO


class CalculateBill:
    """
    Use Case: Recalculate a bill draft

    Business Rules:
    1. Item amounts, subtotal, taxes, grand total and words are always
       derived from the full item list and rates
    2. A bill keeps at least one item; removing the last one is refused
    3. Tax rates stay within 0-28%
    """

    def _apply(self, draft: BillDraft, edit: BillEditDTO) -> BillDraft:
        if edit.action == "add_item":
            return draft.add_item()
        if edit.action == "remove_item":
            if edit.index is None:
                raise BillEditError("Item position is required")
            return draft.remove_item(edit.index)
        if edit.action == "update_item":
            if edit.index is None:
                raise BillEditError("Item position is required")
            return draft.update_item(edit.index, **edit.changes)
        if edit.field is None or edit.value is None:
            raise BillEditError("Tax rate field and value are required")
        return draft.set_tax_rate(edit.field, edit.value)

    async def execute(self, command: CalculateBillCommandDTO) -> Result[BillDraft]:
        """
        Execute recalculation

        Args:
            command: Draft plus optional edit

        Returns:
            Result[BillDraft]: Recalculated draft or INVALID_BILL_EDIT
        """
        draft = command.draft.with_totals()
        if command.edit is None:
            return Return.ok(draft)

        try:
            return Return.ok(self._apply(draft, command.edit))
        except (BillEditError, ValueError) as e:
            return Return.err(
                Error(
                    code="INVALID_BILL_EDIT",
                    message=str(e),
                    reason=f"Edit '{command.edit.action}' rejected",
                )
            )
