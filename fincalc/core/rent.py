"""All-in monthly rent with discount, tax and annual escalation."""

from __future__ import annotations

from typing import List

from fincalc.schemas.rent import RentCostBreakdown, RentInputs, RentResults, RentYear


def calculate_rent(inputs: RentInputs) -> RentResults:
    """
    Order of operations:
      1) sum rent and every recurring add-on
      2) apply the discount, then the tax, to the sum
      3) escalate the monthly total by the annual increase from year 2 on
    """
    base_total = inputs.monthly_rent + inputs.utilities + inputs.insurance + inputs.parking + inputs.other_costs

    monthly_total = base_total
    if inputs.discount_percent > 0:
        monthly_total *= 1 - inputs.discount_percent / 100
    if inputs.tax_rate_percent > 0:
        monthly_total *= 1 + inputs.tax_rate_percent / 100

    # each line item carries its share of the discount and tax
    factor = monthly_total / base_total if base_total else 0.0

    projection: List[RentYear] = []
    for year in range(1, inputs.years + 1):
        year_monthly = monthly_total * (1 + inputs.annual_increase_percent / 100) ** (year - 1)
        projection.append(RentYear(year=year, monthly_total=year_monthly, annual_total=year_monthly * 12))

    return RentResults(
        monthly_total=monthly_total,
        annual_total=monthly_total * 12,
        cost_breakdown=RentCostBreakdown(
            rent=inputs.monthly_rent * factor,
            utilities=inputs.utilities * factor,
            insurance=inputs.insurance * factor,
            parking=inputs.parking * factor,
            other=inputs.other_costs * factor,
        ),
        yearly_projection=projection,
    )


__all__ = ["calculate_rent"]
