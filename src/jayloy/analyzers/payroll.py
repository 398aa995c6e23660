"""
Payroll — Cambodian monthly salary deductions and payroll totals.

Provides:
- NSSF contribution (flat rate on gross, capped)
- Salary tax on taxable income above the threshold
- Net pay per employee
- Monthly payroll summary across active employees
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from jayloy.models.records import Employee, EmployeeStatus

logger = logging.getLogger("jayloy.analyzers.payroll")


@dataclass(frozen=True)
class PayrollRules:
    """Deduction parameters."""

    nssf_rate: float = 0.04
    nssf_cap: float = 200.0
    tax_threshold: float = 1300.0
    tax_rate: float = 0.10


@dataclass(frozen=True)
class Payslip:
    """One month of pay for one employee."""

    gross: float
    nssf: float
    taxable: float
    tax: float
    net: float

    @property
    def total_deductions(self) -> float:
        return self.nssf + self.tax


def compute_payslip(
    base_salary: float,
    allowances: float = 0.0,
    rules: PayrollRules | None = None,
) -> Payslip:
    """Apply NSSF and salary tax to a monthly salary.

    NSSF is ``nssf_rate`` of gross pay, capped at ``nssf_cap``. Tax is
    ``tax_rate`` on whatever taxable income (gross minus NSSF) exceeds
    ``tax_threshold``.
    """
    rules = rules or PayrollRules()
    gross = base_salary + allowances
    nssf = min(gross * rules.nssf_rate, rules.nssf_cap)
    taxable = gross - nssf
    tax = (taxable - rules.tax_threshold) * rules.tax_rate if taxable > rules.tax_threshold else 0.0
    return Payslip(gross=gross, nssf=nssf, taxable=taxable, tax=tax, net=gross - nssf - tax)


def build_employee(
    name: str,
    base_salary: float,
    start_date: date,
    *,
    position: str = "",
    allowances: float = 0.0,
    status: EmployeeStatus = EmployeeStatus.ACTIVE,
    rules: PayrollRules | None = None,
) -> Employee:
    """Create an Employee with its payslip deductions filled in."""
    slip = compute_payslip(base_salary, allowances, rules)
    return Employee(
        name=name,
        position=position,
        base_salary=base_salary,
        allowances=allowances,
        nssf_deduction=slip.nssf,
        tax_deduction=slip.tax,
        net_salary=slip.net,
        start_date=start_date,
        status=status,
    )


def restamp_employee(employee: Employee, rules: PayrollRules | None = None) -> Employee:
    """Recompute an employee's deductions after a salary change."""
    slip = compute_payslip(employee.base_salary, employee.allowances, rules)
    return employee.model_copy(
        update={"nssf_deduction": slip.nssf, "tax_deduction": slip.tax, "net_salary": slip.net}
    )


@dataclass
class PayrollLine:
    """An employee's row in the payroll run."""

    employee_id: str | None
    name: str
    position: str
    base_salary: float
    allowances: float
    gross: float
    nssf: float
    tax: float
    net: float


@dataclass
class PayrollSummary:
    """Monthly payroll across active employees."""

    month: str  # "2025-01"
    lines: list[PayrollLine] = field(default_factory=list)

    @property
    def headcount(self) -> int:
        return len(self.lines)

    @property
    def total_gross(self) -> float:
        return sum(line.gross for line in self.lines)

    @property
    def total_nssf(self) -> float:
        return sum(line.nssf for line in self.lines)

    @property
    def total_tax(self) -> float:
        return sum(line.tax for line in self.lines)

    @property
    def total_deductions(self) -> float:
        return self.total_nssf + self.total_tax

    @property
    def total_net(self) -> float:
        return sum(line.net for line in self.lines)


def summarize_payroll(employees: Sequence[Employee], month: str) -> PayrollSummary:
    """Build the payroll run for ``month`` from the stored deductions.

    Inactive employees are skipped. Figures come from the deduction fields
    stamped on each employee, so a rules change only shows up after the
    employee is re-stamped.
    """
    lines = [
        PayrollLine(
            employee_id=emp.id,
            name=emp.name,
            position=emp.position,
            base_salary=emp.base_salary,
            allowances=emp.allowances,
            gross=emp.gross_salary,
            nssf=emp.nssf_deduction,
            tax=emp.tax_deduction,
            net=emp.net_salary,
        )
        for emp in employees
        if emp.is_active
    ]
    summary = PayrollSummary(month=month, lines=lines)
    logger.info(
        "Payroll %s: %d active employees, net $%.2f",
        month,
        summary.headcount,
        summary.total_net,
    )
    return summary
