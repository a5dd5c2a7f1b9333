"""Depletion ledger turning a serving into stock and waste amounts.

The ledger trusts its caller: quantities and rates are validated upstream
by the care item service. Amounts are kept as ``Decimal`` hundredths so
that consumed plus wasted is exactly the deducted amount.
"""

from decimal import ROUND_HALF_UP, Decimal

from care_inventory.domain.items import (
    CareItem,
    ConsumptionOutcome,
    ItemStatus,
    RemainingHandling,
)

_HUNDREDTHS = Decimal("0.01")
_ZERO = Decimal("0.00")


def to_quantity(value: float | Decimal) -> Decimal:
    """Convert a quantity to a ``Decimal`` rounded half-up to hundredths."""
    return Decimal(str(value)).quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP)


def apply_consumption(
    unit: CareItem,
    served_quantity: float,
    consumption_rate: float,
    remaining_handling: RemainingHandling | None = None,
) -> ConsumptionOutcome:
    """Compute consumed, wasted and deducted amounts for one serving.

    Leftovers that were stored go back to stock, so only the eaten part is
    deducted. Any other handling deducts the whole served amount and counts
    the uneaten part as waste.
    """
    served = Decimal(str(served_quantity))
    consumed = to_quantity(served * Decimal(str(consumption_rate)))
    if remaining_handling == RemainingHandling.STORED:
        deducted = consumed
    else:
        deducted = to_quantity(served)
    wasted = deducted - consumed

    if unit.current_quantity is None:
        return ConsumptionOutcome(
            consumed=consumed,
            wasted=wasted,
            deducted=deducted,
            new_current_quantity=None,
            status=ItemStatus.CONSUMED,
            status_changed=unit.status != ItemStatus.CONSUMED,
        )

    new_quantity = max(to_quantity(unit.current_quantity) - deducted, _ZERO)
    if new_quantity == 0:
        status = ItemStatus.CONSUMED
    elif unit.status == ItemStatus.PENDING:
        status = ItemStatus.IN_PROGRESS
    else:
        status = unit.status
    return ConsumptionOutcome(
        consumed=consumed,
        wasted=wasted,
        deducted=deducted,
        new_current_quantity=new_quantity,
        status=status,
        status_changed=status != unit.status,
    )
