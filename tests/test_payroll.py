"""Tests for Cambodian payroll deductions."""

from datetime import date

import pytest

from jayloy.analyzers.payroll import (
    PayrollRules,
    build_employee,
    compute_payslip,
    restamp_employee,
    summarize_payroll,
)
from jayloy.models.records import EmployeeStatus


class TestPayslip:
    def test_below_tax_threshold(self) -> None:
        slip = compute_payslip(1000)

        assert slip.gross == 1000
        assert slip.nssf == pytest.approx(40.0)
        assert slip.taxable == pytest.approx(960.0)
        assert slip.tax == 0
        assert slip.net == pytest.approx(960.0)

    def test_above_tax_threshold(self) -> None:
        slip = compute_payslip(1500)

        assert slip.nssf == pytest.approx(60.0)
        assert slip.tax == pytest.approx(14.0)
        assert slip.net == pytest.approx(1426.0)
        assert slip.total_deductions == pytest.approx(74.0)

    def test_nssf_cap(self) -> None:
        slip = compute_payslip(6000)

        assert slip.nssf == 200
        assert slip.taxable == 5800
        assert slip.tax == pytest.approx(450.0)
        assert slip.net == pytest.approx(5350.0)

    def test_nssf_reaches_cap_exactly(self) -> None:
        assert compute_payslip(5000).nssf == pytest.approx(200.0)

    def test_allowances_are_part_of_gross(self) -> None:
        slip = compute_payslip(1200, allowances=300)
        assert slip.gross == 1500
        assert slip.tax == pytest.approx(14.0)

    def test_no_tax_at_threshold(self) -> None:
        rules = PayrollRules(nssf_rate=0.0)
        assert compute_payslip(1300, rules=rules).tax == 0
        assert compute_payslip(1310, rules=rules).tax == pytest.approx(1.0)


class TestEmployees:
    def test_build_employee_stamps_deductions(self) -> None:
        employee = build_employee("Sokha", 1500, date(2024, 3, 1), position="Accountant")

        assert employee.nssf_deduction == pytest.approx(60.0)
        assert employee.tax_deduction == pytest.approx(14.0)
        assert employee.net_salary == pytest.approx(1426.0)
        assert employee.position == "Accountant"

    def test_restamp_after_raise(self) -> None:
        employee = build_employee("Sokha", 1000, date(2024, 3, 1))
        raised = restamp_employee(employee.model_copy(update={"base_salary": 6000}))

        assert raised.nssf_deduction == 200
        assert raised.net_salary == pytest.approx(5350.0)


class TestPayrollSummary:
    def test_totals_cover_active_employees_only(self) -> None:
        employees = [
            build_employee("Sokha", 1000, date(2024, 1, 1)),
            build_employee("Dara", 1500, date(2024, 1, 1)),
            build_employee("Vicheka", 3000, date(2023, 1, 1), status=EmployeeStatus.INACTIVE),
        ]
        summary = summarize_payroll(employees, "2025-01")

        assert summary.month == "2025-01"
        assert summary.headcount == 2
        assert summary.total_gross == 2500
        assert summary.total_nssf == pytest.approx(100.0)
        assert summary.total_tax == pytest.approx(14.0)
        assert summary.total_deductions == pytest.approx(114.0)
        assert summary.total_net == pytest.approx(2386.0)

    def test_empty_payroll(self) -> None:
        summary = summarize_payroll([], "2025-02")
        assert summary.headcount == 0
        assert summary.total_net == 0
